"""Conversions between stored image references and capability payloads."""
from __future__ import annotations

import base64
import re

import requests

from tools.capabilities import ImagePayload

DEFAULT_MIME_TYPE = "image/jpeg"
_DATA_URL = re.compile(r"^data:(?P<mime>image/[\w.+-]+);base64,(?P<data>.+)$", re.DOTALL)


def decode_image_url(image_url: str, timeout_seconds: float = 10.0) -> ImagePayload:
    """Resolve a data URL, remote URL or bare base64 string into image bytes.

    Raises :class:`ValueError` for undecodable input and
    :class:`requests.RequestException` when a remote image cannot be fetched.
    """

    value = (image_url or "").strip()
    if not value:
        raise ValueError("image reference is empty")

    match = _DATA_URL.match(value)
    if match:
        return ImagePayload(mime_type=match.group("mime"), data=base64.b64decode(match.group("data")))

    if value.lower().startswith(("http://", "https://")):
        response = requests.get(value, timeout=timeout_seconds)
        response.raise_for_status()
        mime_type = response.headers.get("Content-Type", DEFAULT_MIME_TYPE).split(";")[0].strip()
        return ImagePayload(mime_type=mime_type or DEFAULT_MIME_TYPE, data=response.content)

    return ImagePayload(mime_type=DEFAULT_MIME_TYPE, data=base64.b64decode(value, validate=True))


def encode_data_url(image: ImagePayload) -> str:
    encoded = base64.b64encode(image.data).decode("ascii")
    return f"data:{image.mime_type};base64,{encoded}"


__all__ = ["decode_image_url", "encode_data_url", "DEFAULT_MIME_TYPE"]
