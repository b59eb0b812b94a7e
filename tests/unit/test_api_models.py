"""Unit tests for the REST API request and response models."""

import pytest
from pydantic import ValidationError

from wallpapergen.api.models import (
    ApiKeyRequest,
    ApiKeyTestRequest,
    DownloadRequest,
    GenerateRequest,
    GenerateResponse,
)


class TestGenerateRequest:
    def test_prompt_only(self):
        req = GenerateRequest(prompt="rainy city")
        assert req.prompt == "rainy city"
        assert req.api_key is None

    def test_with_key(self):
        assert GenerateRequest(prompt="x", api_key="AIza-k").api_key == "AIza-k"

    def test_prompt_required(self):
        with pytest.raises(ValidationError):
            GenerateRequest()


class TestKeyRequests:
    def test_api_key_required(self):
        with pytest.raises(ValidationError):
            ApiKeyRequest()

    def test_test_request_key_optional(self):
        assert ApiKeyTestRequest().api_key is None


class TestDownloadRequest:
    def test_prompt_defaults_to_empty(self):
        assert DownloadRequest(url="data:image/jpeg;base64,QQ==").prompt == ""


class TestGenerateResponse:
    def test_from_image_dicts(self, sample_images):
        response = GenerateResponse(
            prompt="Rainy city at night",
            images=[image.to_dict() for image in sample_images],
        )
        assert response.success is True
        assert [image.id for image in response.images] == [i.id for i in sample_images]
