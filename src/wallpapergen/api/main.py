"""AI Wallpaper Generator: FastAPI Application.

This module is the single entry point for the web application.  It defines
the FastAPI ``app`` instance, the REST API routes, mounts the Gradio front
end at ``/``, and provides the ``main()`` CLI function that launches the
uvicorn server.

Architecture
------------
- **Configuration** comes from :data:`wallpapergen.core.config.config`
  (``WALLPAPERGEN_*`` environment variables and ``.env``).
- **Image generation** is a direct call to the Gemini Imagen API through
  :mod:`wallpapergen.core.gemini_service`.  Generated images are returned
  to the caller as data URLs and are not persisted.
- **API keys** are resolved by :class:`~wallpapergen.core.key_resolver.ApiKeyManager`
  (stored key first, then the host-injected key).
- **One generation at a time**: a lock guards ``POST /api/generate``; a
  second request while one is running gets ``409``.

Endpoints
---------
========  ============================  ====================================
Method    Path                          Purpose
========  ============================  ====================================
GET       ``/api/config``               Generation settings and key status
POST      ``/api/generate``             Generate a batch of wallpapers
GET       ``/api/key``                  Active key source (masked)
POST      ``/api/key``                  Validate and store a manual key
POST      ``/api/key/test``             Probe a supplied or the active key
DELETE    ``/api/key``                  Forget the stored key
POST      ``/api/download``             Return a data URL as a file
GET       ``/``                         Gradio front end
========  ============================  ====================================

Usage
-----
CLI (installed entry point)::

    wallpapergen

Direct invocation::

    python -m wallpapergen.api.main
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response

from wallpapergen import __version__
from wallpapergen.api.models import (
    ApiKeyRequest,
    ApiKeyTestRequest,
    DownloadRequest,
    GenerateRequest,
    GenerateResponse,
)
from wallpapergen.core import gemini_service
from wallpapergen.core.config import config
from wallpapergen.core.images import (
    build_image_results,
    decode_data_url,
    download_filename,
    extension_for_mime,
    remove_download_files,
)
from wallpapergen.core.key_resolver import ApiKeyManager

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Application lifecycle.
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application startup and shutdown lifecycle.

    On startup:
        Creates the :class:`ApiKeyManager` and the generation lock and stores
        them on ``app.state``.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to the application for the duration of its lifetime.
    """
    app.state.key_manager = ApiKeyManager.from_config(config)
    app.state.generation_lock = asyncio.Lock()
    logger.info(f"API key source at startup: {app.state.key_manager.status().source}")

    yield

    logger.info("Wallpaper generator shutting down.")


app = FastAPI(
    title="AI Wallpaper Generator",
    description="Phone wallpaper generation through the Gemini Imagen API.",
    version=__version__,
    lifespan=lifespan,
)


def _key_manager() -> ApiKeyManager:
    return app.state.key_manager


def _error_detail(error: BaseException) -> str:
    return str(error).strip() or "Unknown error"


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@app.get("/api/config")
async def get_config() -> dict:
    """Return the generation settings and key status for the frontend.

    Returns:
        Dictionary with ``version``, ``image_model``, ``number_of_images``,
        ``output_mime_type``, ``aspect_ratio``, ``default_prompt``,
        ``locale``, and ``api_key`` (key status).
    """
    return {
        "version": __version__,
        "image_model": config.image_model,
        "number_of_images": config.number_of_images,
        "output_mime_type": config.output_mime_type,
        "aspect_ratio": config.aspect_ratio,
        "default_prompt": config.default_prompt,
        "locale": config.locale,
        "api_key": _key_manager().status().to_dict(),
    }


@app.post("/api/generate", response_model=GenerateResponse)
async def generate(req: GenerateRequest) -> dict:
    """Generate a batch of wallpapers.

    The key used is ``req.api_key`` when given, otherwise the stored key,
    otherwise the host key.

    Args:
        req: Validated :class:`GenerateRequest` payload.

    Returns:
        Dictionary with ``success``, ``prompt``, and ``images``.

    Raises:
        HTTPException: 400 for a blank prompt, 401 when the key is missing or
            rejected (a rejected stored key is cleared), 409 while another
            generation is running, 502 for an empty result or any
            other upstream failure.
    """
    prompt = req.prompt.strip()
    if not prompt:
        raise HTTPException(status_code=400, detail="prompt must not be empty")

    lock: asyncio.Lock = app.state.generation_lock
    if lock.locked():
        raise HTTPException(status_code=409, detail="A generation is already in progress")

    manager = _key_manager()
    request_key = (req.api_key or "").strip()
    api_key = request_key or manager.resolve()[0]

    async with lock:
        try:
            urls = await run_in_threadpool(gemini_service.generate_wallpapers, prompt, api_key)
        except Exception as e:
            logger.error(f"Generation failed: {e}", exc_info=True)
            # A per-request key is never stored, so only resolved keys are reset.
            if not request_key:
                manager.handle_failure(e, api_key)
            if gemini_service.is_invalid_key_error(e):
                raise HTTPException(status_code=401, detail=_error_detail(e)) from e
            raise HTTPException(status_code=502, detail=_error_detail(e)) from e

    if not urls:
        logger.warning("Generation returned no images")
        raise HTTPException(status_code=502, detail="No images were generated")

    images = build_image_results(urls, prompt)
    return {
        "success": True,
        "prompt": prompt,
        "images": [image.to_dict() for image in images],
    }


@app.get("/api/key")
async def get_key_status() -> dict:
    """Return which key is active (``stored``, ``host`` or ``none``), masked."""
    return _key_manager().status().to_dict()


@app.post("/api/key")
async def save_key(req: ApiKeyRequest) -> dict:
    """Validate a manually entered key and store it.

    Raises:
        HTTPException: 400 for a blank key, 401 if the probe rejects it,
            502 for any other upstream failure.
    """
    api_key = req.api_key.strip()
    if not api_key:
        raise HTTPException(status_code=400, detail="api_key must not be empty")

    try:
        status = await run_in_threadpool(_key_manager().save_and_validate, api_key)
    except Exception as e:
        code = 401 if gemini_service.is_invalid_key_error(e) else 502
        raise HTTPException(status_code=code, detail=_error_detail(e)) from e

    return {"success": True, **status.to_dict()}


@app.post("/api/key/test")
async def test_key(req: ApiKeyTestRequest | None = None) -> dict:
    """Probe a supplied key, or the active key when none is supplied.

    Probing the active key clears a stored key that turns out to be invalid.

    Raises:
        HTTPException: 401 if the key is missing or rejected, 502 otherwise.
    """
    supplied = ((req.api_key if req else None) or "").strip()
    manager = _key_manager()
    try:
        if supplied:
            await run_in_threadpool(gemini_service.test_api_key, supplied)
        else:
            await run_in_threadpool(manager.validate_current)
    except Exception as e:
        code = 401 if gemini_service.is_invalid_key_error(e) else 502
        raise HTTPException(status_code=code, detail=_error_detail(e)) from e

    return {"valid": True, **manager.status().to_dict()}


@app.delete("/api/key")
async def delete_key() -> dict:
    """Forget the stored key."""
    manager = _key_manager()
    removed = manager.clear()
    return {"success": True, "removed": removed, **manager.status().to_dict()}


@app.post("/api/download")
async def download(req: DownloadRequest) -> Response:
    """Return a data-URL image as a file attachment.

    The file name is built from the prompt (``ai_wallpaper_<slug>.<ext>``).

    Raises:
        HTTPException: 400 if the URL is not a base64 data URL.
    """
    try:
        mime_type, raw = decode_data_url(req.url)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    filename = download_filename(req.prompt, extension_for_mime(mime_type))
    return Response(
        content=raw,
        media_type=mime_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# ---------------------------------------------------------------------------
# Gradio front end.
# ---------------------------------------------------------------------------


def mount_ui(fastapi_app: FastAPI) -> FastAPI:
    """Mount the Gradio UI at ``/`` on the given FastAPI app.

    Download files left over from a previous run are removed first.
    """
    import gradio as gr

    from wallpapergen.ui.app import create_ui

    remove_download_files(config.downloads_dir)
    return gr.mount_gradio_app(
        fastapi_app,
        create_ui(),
        path="/",
        allowed_paths=[str(config.downloads_dir.resolve())],
    )


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server with the API and the Gradio UI.

    Reads host and port from :data:`~wallpapergen.core.config.config`
    (``WALLPAPERGEN_SERVER_HOST`` and ``WALLPAPERGEN_SERVER_PORT``).
    Defaults to ``0.0.0.0:7860``.

    This function is registered as the ``wallpapergen`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logger.info(f"Configuration: {config.model_dump()}")
    uvicorn.run(
        mount_ui(app),
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
