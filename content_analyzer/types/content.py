"""
Type definitions for social-media content.

A Content record is what the loader produces and what the analyzer consumes.
Records are frozen once constructed.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Engagement(BaseModel):
    """Engagement counters attached to a published post."""

    model_config = ConfigDict(frozen=True)

    likes: int = Field(default=0, ge=0, description="Number of likes")
    comments: int = Field(default=0, ge=0, description="Number of comments")
    shares: int = Field(default=0, ge=0, description="Number of shares")
    views: int = Field(default=0, ge=0, description="Number of views")


class Image(BaseModel):
    """An image referenced by a post."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(default="", description="Local file path of the image")
    url: str = Field(default="", description="Remote URL of the image")
    caption: str = Field(default="", description="Optional caption")
    width: int = Field(default=0, ge=0, description="Width in pixels")
    height: int = Field(default=0, ge=0, description="Height in pixels")
    size: int = Field(default=0, ge=0, description="File size in bytes")
    format: str = Field(default="", description="Image format (jpeg, png, ...)")


class Content(BaseModel):
    """A single post to analyze."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., description="Content identifier")
    title: str = Field(default="", description="Post title")
    text: str = Field(default="", description="Post body")
    images: List[Image] = Field(default_factory=list, description="Ordered image references")
    tags: List[str] = Field(default_factory=list, description="Author-supplied tags")
    published_at: Optional[datetime] = Field(default=None, description="Publish timestamp")
    author: str = Field(default="", description="Author name")
    engagement: Engagement = Field(default_factory=Engagement, description="Engagement counters")
    file_path: str = Field(default="", description="Source file the content was loaded from")
    content_type: str = Field(
        default="post",
        alias="type",
        description="Content type tag (post, markdown, text, ...)",
    )
