"""Pydantic request and response models for the Wallpaper Generator API.

These models define the JSON schema for every API endpoint.  FastAPI uses
them for automatic request validation, serialisation, and OpenAPI
documentation generation.

Models
------
GenerateRequest
    Payload for ``POST /api/generate``.
ApiKeyRequest
    Payload for ``POST /api/key``: a manually entered key to validate and
    store.
ApiKeyTestRequest
    Payload for ``POST /api/key/test``: an optional key to probe.
DownloadRequest
    Payload for ``POST /api/download``: an image data URL and its prompt.
ImageResultModel / GenerateResponse
    Response shapes for generated images.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class GenerateRequest(BaseModel):
    """Request body for the ``POST /api/generate`` endpoint.

    Attributes:
        prompt: The user's creative prompt.
        api_key: Optional key for this request only.  When omitted the
            stored key is used, then the host-injected key.
    """

    prompt: str = Field(
        ...,
        description="Text describing the desired wallpaper.",
    )
    api_key: str | None = Field(
        default=None,
        description="Optional API key overriding the stored/host key for this request.",
    )


class ApiKeyRequest(BaseModel):
    """Request body for the ``POST /api/key`` endpoint."""

    api_key: str = Field(
        ...,
        description="API key to validate and store.",
    )


class ApiKeyTestRequest(BaseModel):
    """Request body for the ``POST /api/key/test`` endpoint."""

    api_key: str | None = Field(
        default=None,
        description="Key to probe.  None = probe the currently resolved key.",
    )


class DownloadRequest(BaseModel):
    """Request body for the ``POST /api/download`` endpoint."""

    url: str = Field(
        ...,
        description="Image as a base64 data URL.",
    )
    prompt: str = Field(
        default="",
        description="Prompt the image was generated from (used for the file name).",
    )


class ImageResultModel(BaseModel):
    """A single generated image."""

    id: str
    url: str
    prompt: str


class GenerateResponse(BaseModel):
    """Response body of ``POST /api/generate``."""

    success: bool = True
    prompt: str
    images: list[ImageResultModel]
