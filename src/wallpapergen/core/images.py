"""Image result data model and data-URL helpers.

A generation returns a handful of images that live only in the current
session: each one is an :class:`ImageResult` holding an identifier, the image
itself encoded as a ``data:`` URL, and the prompt that produced it.  Nothing
here touches the network; the helpers only convert between raw bytes, data
URLs, Pillow images, and files prepared for download.
"""

from __future__ import annotations

import base64
import binascii
import io
import re
import shutil
import time
from dataclasses import dataclass
from pathlib import Path

from PIL import Image

_DATA_URL_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<payload>.*)$", re.DOTALL)
_FILENAME_UNSAFE_RE = re.compile(r"[^a-z0-9]", re.IGNORECASE)

DOWNLOAD_PREFIX = "ai_wallpaper_"
MAX_SLUG_LENGTH = 30

_MIME_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}


@dataclass(frozen=True)
class ImageResult:
    """A single generated image held in the session's transient list.

    Attributes:
        id: Identifier unique within the batch (``"<epoch_ms>-<index>"``).
        url: The image encoded as a ``data:`` URL.
        prompt: The prompt the user typed (without the style suffix).
    """

    id: str
    url: str
    prompt: str

    def to_dict(self) -> dict:
        return {"id": self.id, "url": self.url, "prompt": self.prompt}


def make_image_id(index: int, now_ms: int | None = None) -> str:
    """Build an image identifier from a timestamp and the batch index."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{now_ms}-{index}"


def build_image_results(urls: list[str], prompt: str) -> list[ImageResult]:
    """Wrap the data URLs from one API response into :class:`ImageResult` objects.

    All images of a batch share the same timestamp, so the batch index keeps
    their identifiers distinct.

    Args:
        urls: Data URLs in the order the API returned them.
        prompt: The prompt used for the request.

    Returns:
        One result per URL, in the same order.
    """
    now_ms = int(time.time() * 1000)
    return [
        ImageResult(id=make_image_id(index, now_ms), url=url, prompt=prompt)
        for index, url in enumerate(urls)
    ]


def to_data_url(raw: bytes, mime_type: str = "image/jpeg") -> str:
    """Encode raw image bytes as a base64 ``data:`` URL."""
    payload = base64.b64encode(raw).decode("ascii")
    return f"data:{mime_type};base64,{payload}"


def decode_data_url(url: str) -> tuple[str, bytes]:
    """Split a base64 ``data:`` URL into its MIME type and raw bytes.

    Raises:
        ValueError: If the URL is not a base64 data URL or the payload is
            not valid base64.
    """
    match = _DATA_URL_RE.match(url or "")
    if not match:
        raise ValueError("Not a base64 data URL")
    try:
        raw = base64.b64decode(match.group("payload"), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Invalid base64 payload: {e}") from e
    return match.group("mime"), raw


def extension_for_mime(mime_type: str) -> str:
    """Map an image MIME type to a file extension (``jpg`` when unknown)."""
    return _MIME_EXTENSIONS.get(mime_type.lower(), "jpg")


def download_filename(prompt: str, extension: str = "jpg") -> str:
    """Build the file name offered when a wallpaper is downloaded.

    Every character outside ``[a-zA-Z0-9]`` becomes ``_``, the result is
    lower-cased and cut to 30 characters.

    Example:
        >>> download_filename("Rainy City, night!")
        'ai_wallpaper_rainy_city__night_.jpg'
    """
    slug = _FILENAME_UNSAFE_RE.sub("_", prompt).lower()[:MAX_SLUG_LENGTH]
    return f"{DOWNLOAD_PREFIX}{slug}.{extension}"


def load_pil_image(url: str) -> Image.Image:
    """Decode a data URL into a Pillow image for display in the grid."""
    _, raw = decode_data_url(url)
    image = Image.open(io.BytesIO(raw))
    image.load()
    return image


def write_download_file(image: ImageResult, directory: Path) -> Path:
    """Write an image's bytes under its download file name.

    Each image gets its own sub-directory named after its id, so two
    wallpapers generated from the same prompt never overwrite each other.

    Args:
        image: The image to save.
        directory: Base download directory.

    Returns:
        Path of the written file.
    """
    mime_type, raw = decode_data_url(image.url)
    target_dir = directory / image.id
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / download_filename(image.prompt, extension_for_mime(mime_type))
    path.write_bytes(raw)
    return path


def remove_download_files(directory: Path, image_ids: list[str] | None = None) -> int:
    """Delete download files written by :func:`write_download_file`.

    Args:
        directory: Base download directory.
        image_ids: Ids whose sub-directories should go.  None removes every
            sub-directory.

    Returns:
        Number of sub-directories removed.
    """
    if not directory.is_dir():
        return 0
    if image_ids is None:
        targets = [path for path in directory.iterdir() if path.is_dir()]
    else:
        targets = [directory / image_id for image_id in image_ids]

    removed = 0
    for target in targets:
        if target.is_dir():
            shutil.rmtree(target)
            removed += 1
    return removed
