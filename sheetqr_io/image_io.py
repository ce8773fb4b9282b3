"""Image output helpers."""

# Module responsibilities:
# - Decode base64 (optionally data-URI prefixed) PNG payloads sent by the GUI.
# - Write image bytes under a target directory, creating it when needed.

from __future__ import annotations

import base64
import binascii
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .errors import ImageSaveError
from .utils.log import get_logger

logger = get_logger("image_io")

PNG_DATA_URI_PREFIX = "data:image/png;base64,"


class SaveImageRequest(BaseModel):
    """Payload of the ``save_image`` command."""

    model_config = ConfigDict(extra="forbid")

    directory: str
    filename: str = Field(min_length=1)
    data: str


def decode_image_data(data: str) -> bytes:
    """Strip the PNG data-URI prefix and base64-decode the remainder."""

    payload = data.replace(PNG_DATA_URI_PREFIX, "").strip()
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ImageSaveError(str(exc), summary="Failed to decode image data") from exc


def write_image_bytes(directory: Path, filename: str, content: bytes) -> Path:
    """Write ``content`` to ``directory / filename`` and return the path."""

    path = directory / filename
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ImageSaveError(str(exc), summary="Failed to create directory") from exc
    try:
        path.write_bytes(content)
    except OSError as exc:
        raise ImageSaveError(str(exc), summary="Failed to write file") from exc
    logger.info("Image written", extra={"output": str(path), "bytes": len(content)})
    return path


def save_image(request: SaveImageRequest) -> str:
    """Decode the request payload, write it and return a confirmation message."""

    content = decode_image_data(request.data)
    path = write_image_bytes(Path(request.directory), request.filename, content)
    return f"Successfully saved image to {path}"
