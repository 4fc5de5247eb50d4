"""Load binary assets (logos, fonts, photos) before layout starts."""

from __future__ import annotations

import base64
import binascii
import logging
import re
from pathlib import Path

import httpx

log = logging.getLogger(__name__)

_URL_RE = re.compile(r"^https?://", re.IGNORECASE)
_DATA_URI_RE = re.compile(r"^data:(?P<mime>[\w/+.-]+)?;base64,", re.IGNORECASE)

_JPEG_MAGIC = b"\xff\xd8\xff"
_PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


def is_url(source: str) -> bool:
    return bool(_URL_RE.match(source))


def load_asset(source: str, timeout: float = 30.0) -> bytes:
    """Return the bytes behind a local path or an http(s) URL.

    Raises ``FileNotFoundError`` for a missing file and ``OSError`` when a
    download fails; callers treat either as a failure of the whole render.
    """
    if is_url(source):
        try:
            resp = httpx.get(source, timeout=timeout, follow_redirects=True)
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            raise OSError(f"Could not download asset {source}: {exc}") from exc
        log.debug("Downloaded %s (%d bytes)", source, len(resp.content))
        return resp.content

    path = Path(source).expanduser().resolve()
    if not path.exists():
        raise FileNotFoundError(f"Asset not found: {path}")
    return path.read_bytes()


def sniff_image_format(data: bytes) -> str | None:
    """``"JPEG"``, ``"PNG"`` or ``None`` from the leading magic bytes."""
    if data.startswith(_JPEG_MAGIC):
        return "JPEG"
    if data.startswith(_PNG_MAGIC):
        return "PNG"
    return None


def decode_photo(payload: str | None) -> bytes | None:
    """Decode a base64 string or data URI into image bytes.

    Returns ``None`` when the payload is not a decodable JPEG or PNG, so the
    caller can draw a placeholder instead.
    """
    if not payload:
        return None
    body = _DATA_URI_RE.sub("", payload.strip(), count=1)
    body = re.sub(r"\s+", "", body)
    try:
        data = base64.b64decode(body, validate=True)
    except (binascii.Error, ValueError):
        log.warning("Photo payload is not valid base64; using placeholder")
        return None
    if sniff_image_format(data) is None:
        log.warning("Photo payload is not a JPEG or PNG image; using placeholder")
        return None
    return data
