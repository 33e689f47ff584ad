"""
Tests for the Pillow image analyzer.

Tests cover:
- Validation of existence, extension and size
- Basic file information
- Visual, composition, quality and style metrics
"""

import pytest
from PIL import Image as PILImage

from content_analyzer.config import ImageSettings
from content_analyzer.exceptions import ErrorCode, ImageAnalysisError, ImageValidationError
from content_analyzer.images import ImageAnalyzer, image_score, resolution_score
from content_analyzer.images.analyzer import classify_mood, classify_style
from content_analyzer.types import Composition


@pytest.fixture
def image_analyzer():
    return ImageAnalyzer(ImageSettings())


# =============================================================================
# Validation
# =============================================================================


class TestValidate:
    """Tests for ImageAnalyzer.validate."""

    def test_valid_image(self, image_analyzer, make_image):
        image_analyzer.validate(make_image())

    def test_missing_file(self, image_analyzer, tmp_path):
        with pytest.raises(ImageValidationError) as exc_info:
            image_analyzer.validate(tmp_path / "missing.png")

        assert exc_info.value.error_code == ErrorCode.IMAGE_NOT_FOUND
        assert exc_info.value.path.endswith("missing.png")

    def test_unsupported_extension(self, image_analyzer, make_image):
        path = make_image("photo.tiff")

        with pytest.raises(ImageValidationError) as exc_info:
            image_analyzer.validate(path)

        assert exc_info.value.error_code == ErrorCode.IMAGE_VALIDATION_ERROR
        assert ".tiff" in exc_info.value.message

    def test_extension_is_case_insensitive(self, image_analyzer, make_image):
        image_analyzer.validate(make_image("PHOTO.PNG"))

    def test_too_large(self, make_image):
        analyzer = ImageAnalyzer(ImageSettings(image_max_size=10))

        with pytest.raises(ImageValidationError) as exc_info:
            analyzer.validate(make_image())

        assert exc_info.value.error_code == ErrorCode.IMAGE_TOO_LARGE


# =============================================================================
# Info
# =============================================================================


class TestInfo:
    """Tests for ImageAnalyzer.info."""

    def test_png_info(self, image_analyzer, make_image):
        path = make_image(size=(300, 200))
        info = image_analyzer.info(path)

        assert (info.width, info.height) == (300, 200)
        assert info.format == "png"
        assert info.size == path.stat().st_size

    def test_jpeg_info(self, image_analyzer, make_image):
        assert image_analyzer.info(make_image("photo.jpg")).format == "jpeg"

    def test_corrupt_file(self, image_analyzer, tmp_path):
        path = tmp_path / "broken.png"
        path.write_bytes(b"not an image")

        with pytest.raises(ImageAnalysisError) as exc_info:
            image_analyzer.info(path)

        assert exc_info.value.error_code == ErrorCode.IMAGE_ANALYSIS_ERROR

    def test_decompression_bomb(self, image_analyzer, make_image, monkeypatch):
        """Images over Pillow's pixel limit fail as analysis errors."""
        path = make_image(size=(300, 200))
        monkeypatch.setattr(PILImage, "MAX_IMAGE_PIXELS", 1000)

        with pytest.raises(ImageAnalysisError) as exc_info:
            image_analyzer.analyze(path)

        assert exc_info.value.path == str(path)


# =============================================================================
# Analysis
# =============================================================================


class TestAnalyze:
    """Tests for ImageAnalyzer.analyze."""

    def test_solid_image(self, image_analyzer, make_image):
        analysis = image_analyzer.analyze(make_image(size=(300, 200), color=(200, 120, 50)))

        assert analysis.visual.brightness == pytest.approx(0.533, abs=0.01)
        assert analysis.visual.saturation == pytest.approx(0.75, abs=0.01)
        assert analysis.visual.dominant_colors
        assert all(c.startswith("#") and len(c) == 7 for c in analysis.visual.dominant_colors)
        assert analysis.composition.rule_of_thirds is True
        assert analysis.composition.symmetry is False
        assert analysis.composition.balance_score == pytest.approx(1.0)
        assert analysis.quality.resolution == "300x200"
        assert analysis.quality.resolution_score == pytest.approx(0.3)
        assert analysis.style.style == "modern"
        assert analysis.style.mood == "balanced"
        assert 60 <= analysis.score <= 100

    def test_square_image_is_symmetric(self, image_analyzer, make_image):
        analysis = image_analyzer.analyze(make_image(size=(200, 200)))

        assert analysis.composition.symmetry is True
        assert analysis.composition.rule_of_thirds is False

    def test_portrait(self, image_analyzer, make_image):
        assert image_analyzer.analyze(make_image(size=(100, 300))).style.style == "portrait"

    def test_dark_image(self, image_analyzer, make_image):
        analysis = image_analyzer.analyze(make_image(color=(10, 10, 10)))

        assert analysis.style.mood == "dark"
        assert analysis.quality.exposure_score < 0.2

    def test_edges_increase_sharpness(self, image_analyzer, make_image):
        solid = image_analyzer.analyze(make_image("solid.png"))
        striped = image_analyzer.analyze(make_image("striped.png", striped=True))

        assert striped.quality.sharpness > solid.quality.sharpness

    def test_validation_runs_first(self, image_analyzer, tmp_path):
        with pytest.raises(ImageValidationError):
            image_analyzer.analyze(tmp_path / "nope.png")


# =============================================================================
# Scoring helpers
# =============================================================================


class TestScoringHelpers:
    """Tests for the pure scoring helpers."""

    @pytest.mark.parametrize(
        "size,expected",
        [((1920, 1080), 0.9), ((1280, 800), 0.7), ((800, 700), 0.5), ((300, 200), 0.3)],
    )
    def test_resolution_score(self, size, expected):
        assert resolution_score(*size) == expected

    @pytest.mark.parametrize("aspect,style", [(2.0, "landscape"), (0.5, "portrait"), (1.0, "modern")])
    def test_classify_style(self, aspect, style):
        assert classify_style(aspect) == style

    @pytest.mark.parametrize(
        "brightness,saturation,mood",
        [
            (0.8, 0.7, "vibrant"),
            (0.8, 0.1, "bright"),
            (0.2, 0.9, "dark"),
            (0.5, 0.1, "muted"),
            (0.5, 0.5, "balanced"),
        ],
    )
    def test_classify_mood(self, brightness, saturation, mood):
        assert classify_mood(brightness, saturation) == mood

    def test_image_score(self):
        composition = Composition(rule_of_thirds=True, symmetry=False, balance_score=1.0)
        assert image_score(1.0, composition) == pytest.approx(95.0)

    def test_image_score_minimum(self):
        composition = Composition(rule_of_thirds=False, symmetry=False, balance_score=0.0)
        assert image_score(0.0, composition) == pytest.approx(60.0)
