"""Pydantic models for API requests and responses."""

from pydantic import BaseModel, Field


class ParseRequest(BaseModel):
    """Request model for the parse endpoint."""

    url: str = Field(description="Absolute URL of the article page")


class ParseResponse(BaseModel):
    """Extracted article."""

    date: str = Field(description="Publication time, UTC ISO-8601")
    title: str = Field(description="Article title")
    content: str = Field(description="Article body, paragraphs separated by a blank line")


class ProcessRequest(BaseModel):
    """Request model for the process endpoint."""

    text: str = Field(description="Article text to transform")
    action: str = Field(description="summary, theses or social_post")
    source_url: str | None = Field(default=None, description="Article URL for backlinks")


class ProcessResponse(BaseModel):
    """Generated artifact."""

    result: str


class TranslateRequest(BaseModel):
    """Request model for the translate endpoint."""

    text: str = Field(description="Text to translate")


class TranslateResponse(BaseModel):
    """Translated text."""

    translation: str


class ImageRequest(BaseModel):
    """Request model for the image endpoint."""

    prompt: str = Field(description="Description of the illustration")


class ImageResponse(BaseModel):
    """Generated illustration."""

    image: str = Field(description="Image as a base64 data URL")
    mime_type: str
    model: str = Field(description="Model that produced the image")


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str = Field(description="Health status")
    version: str = Field(description="Application version")
