"""
Image analysis with Pillow.

Validates image files against the configured extension allow-list and size
limit, reads basic file information, and computes visual, composition,
quality and style metrics from pixel statistics. Metrics are computed on a
downsampled copy so large images cost the same as small ones.
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

from PIL import Image, ImageChops, ImageFilter, ImageStat, UnidentifiedImageError

from ..config import ImageSettings
from ..exceptions import ErrorCode, ImageAnalysisError, ImageValidationError
from ..scoring.text_utils import clamp
from ..types.analysis import (
    Composition,
    ImageAnalysis,
    ImageInfo,
    ImageQuality,
    ImageStyle,
    VisualElements,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

SAMPLE_SIZE = (256, 256)
DOMINANT_COLORS = 5
PALETTE_COLORS = 8

# (minimum pixel count, resolution score), highest first
RESOLUTION_TIERS: Tuple[Tuple[int, float], ...] = (
    (2_000_000, 0.9),
    (1_000_000, 0.7),
    (500_000, 0.5),
)
MIN_RESOLUTION_SCORE = 0.3

SHARPNESS_SCALE = 64.0
NOISE_SCALE = 32.0


def resolution_score(width: int, height: int) -> float:
    """Score resolution by total pixel count."""
    pixels = width * height
    for threshold, score in RESOLUTION_TIERS:
        if pixels >= threshold:
            return score
    return MIN_RESOLUTION_SCORE


def classify_style(aspect_ratio: float) -> str:
    """Classify framing from aspect ratio."""
    if aspect_ratio > 1.5:
        return "landscape"
    if aspect_ratio < 0.8:
        return "portrait"
    return "modern"


def classify_mood(brightness: float, saturation: float) -> str:
    """Classify mood from brightness and saturation."""
    if brightness > 0.6 and saturation > 0.5:
        return "vibrant"
    if brightness > 0.6:
        return "bright"
    if brightness < 0.35:
        return "dark"
    if saturation < 0.2:
        return "muted"
    return "balanced"


def image_score(quality: float, composition: Composition) -> float:
    """Combine quality and composition into a 0-100 score."""
    score = 60.0 + quality * 25
    if composition.rule_of_thirds:
        score += 5
    if composition.symmetry:
        score += 5
    score += composition.balance_score * 5
    return clamp(score, 0.0, 100.0)


class ImageAnalyzer:
    """
    Pillow-based image analyzer.

    Args:
        settings: Image settings (size limit and extension allow-list).
    """

    def __init__(self, settings: Optional[ImageSettings] = None):
        self.settings = settings or ImageSettings()

    @property
    def supported_formats(self) -> List[str]:
        return list(self.settings.image_supported_ext)

    def validate(self, image_path: PathLike) -> None:
        """
        Check that an image exists, has an allowed extension and fits the size limit.

        Raises:
            ImageValidationError: If any check fails.
        """
        path = Path(image_path)
        if not path.is_file():
            raise ImageValidationError(
                f"Image not found: {path}",
                path=str(path),
                error_code=ErrorCode.IMAGE_NOT_FOUND,
            )

        ext = path.suffix.lower()
        if ext not in self.settings.image_supported_ext:
            raise ImageValidationError(
                f"Unsupported image format '{ext}'",
                path=str(path),
                details={"supported": self.supported_formats},
            )

        size = path.stat().st_size
        if size > self.settings.image_max_size:
            raise ImageValidationError(
                f"Image is {size} bytes, larger than the {self.settings.image_max_size} byte limit",
                path=str(path),
                error_code=ErrorCode.IMAGE_TOO_LARGE,
            )

    def info(self, image_path: PathLike) -> ImageInfo:
        """
        Read dimensions, size and format without decoding pixel data.

        Raises:
            ImageAnalysisError: If the file is not a readable image.
        """
        path = Path(image_path)
        try:
            with Image.open(path) as img:
                width, height = img.size
                fmt = (img.format or path.suffix.lstrip(".")).lower()
            size = path.stat().st_size
        except (OSError, UnidentifiedImageError, Image.DecompressionBombError, ValueError) as e:
            raise ImageAnalysisError(
                f"Cannot read image: {path}",
                path=str(path),
                internal_message=str(e),
            ) from e
        return ImageInfo(width=width, height=height, size=size, format=fmt)

    def analyze(self, image_path: PathLike) -> ImageAnalysis:
        """
        Validate and analyze an image.

        Args:
            image_path: Path to the image file.

        Returns:
            ImageAnalysis with sub-metrics and a score in [0, 100].

        Raises:
            ImageValidationError: If validation fails.
            ImageAnalysisError: If the image cannot be decoded.
        """
        path = Path(image_path)
        self.validate(path)
        info = self.info(path)

        try:
            with Image.open(path) as img:
                sample = img.convert("RGB")
                sample.thumbnail(SAMPLE_SIZE)
        except (OSError, UnidentifiedImageError, Image.DecompressionBombError, ValueError) as e:
            raise ImageAnalysisError(
                f"Cannot decode image: {path}",
                path=str(path),
                internal_message=str(e),
            ) from e

        gray = sample.convert("L")
        visual = self._visual_elements(sample, gray)
        composition = self._composition(gray, info)
        quality = self._quality(gray, info, visual.brightness)
        aspect = info.width / info.height if info.height else 1.0
        style = ImageStyle(
            style=classify_style(aspect),
            mood=classify_mood(visual.brightness, visual.saturation),
        )

        analysis = ImageAnalysis(
            image_path=str(path),
            info=info,
            visual=visual,
            composition=composition,
            quality=quality,
            style=style,
            score=image_score(quality.overall_quality, composition),
        )
        logger.debug(f"Analyzed image {path}", extra={"image_score": round(analysis.score, 1)})
        return analysis

    def _visual_elements(self, sample: Image.Image, gray: Image.Image) -> VisualElements:
        luminance = ImageStat.Stat(gray)
        saturation = ImageStat.Stat(sample.convert("HSV")).mean[1] / 255

        return VisualElements(
            dominant_colors=self._dominant_colors(sample),
            brightness=clamp(luminance.mean[0] / 255),
            contrast=clamp(luminance.stddev[0] / 128),
            saturation=clamp(saturation),
        )

    def _dominant_colors(self, sample: Image.Image) -> List[str]:
        quantized = sample.quantize(colors=PALETTE_COLORS)
        palette = quantized.getpalette() or []
        counts = sorted(quantized.getcolors() or [], key=lambda c: -c[0])

        colors = []
        for _, index in counts[:DOMINANT_COLORS]:
            r, g, b = palette[index * 3:index * 3 + 3]
            colors.append(f"#{r:02x}{g:02x}{b:02x}")
        return colors

    def _composition(self, gray: Image.Image, info: ImageInfo) -> Composition:
        aspect = info.width / info.height if info.height else 1.0

        width, height = gray.size
        if width >= 2:
            left = ImageStat.Stat(gray.crop((0, 0, width // 2, height))).mean[0]
            right = ImageStat.Stat(gray.crop((width // 2, 0, width, height))).mean[0]
            balance = 1 - abs(left - right) / 255
        else:
            balance = 1.0

        return Composition(
            rule_of_thirds=1.4 < aspect < 1.8,
            symmetry=0.9 < aspect < 1.1,
            balance_score=clamp(balance),
        )

    def _quality(self, gray: Image.Image, info: ImageInfo, brightness: float) -> ImageQuality:
        edges = gray.filter(ImageFilter.FIND_EDGES)
        sharpness = clamp(ImageStat.Stat(edges).mean[0] / SHARPNESS_SCALE)

        denoised = gray.filter(ImageFilter.MedianFilter(3))
        noise = clamp(ImageStat.Stat(ImageChops.difference(gray, denoised)).mean[0] / NOISE_SCALE)

        exposure = clamp(1 - abs(brightness - 0.5) * 2)
        res_score = resolution_score(info.width, info.height)
        overall = res_score * 0.3 + sharpness * 0.3 + (1 - noise) * 0.2 + exposure * 0.2

        return ImageQuality(
            resolution=f"{info.width}x{info.height}",
            resolution_score=res_score,
            sharpness=sharpness,
            noise_level=noise,
            exposure_score=exposure,
            overall_quality=clamp(overall),
        )
