"""
Asset codec: validates an uploaded file's media type and produces the
transport-encoded SourceAsset the request builder works from.

Nothing here decodes or re-encodes pixels; bytes are carried through untouched.
"""
import re
from typing import Optional

from purecut.utils.image_converter import to_base64, from_base64, to_data_url, parse_data_url
from .types import SourceAsset, InvalidFileType

INVALID_FILE_TYPE_MESSAGE = "Please upload a valid image file."

_IMAGE_TYPE_RE = re.compile(r"^image/[A-Za-z0-9][A-Za-z0-9!#$&^_.+-]*$")


def normalize_media_type(value: Optional[str]) -> str:
    """Drop parameters (``; charset=...``) and surrounding whitespace, and lowercase."""
    if not value:
        return ""
    return value.split(";", 1)[0].strip().lower()


def is_image_media_type(value: Optional[str]) -> bool:
    return bool(_IMAGE_TYPE_RE.match(normalize_media_type(value)))


def ingest(data: bytes, declared_type: str) -> SourceAsset:
    if not is_image_media_type(declared_type):
        raise InvalidFileType(INVALID_FILE_TYPE_MESSAGE)
    raw = bytes(data)
    return SourceAsset(data=raw, media_type=normalize_media_type(declared_type), encoded=to_base64(raw))


def encode(data: bytes) -> str:
    return to_base64(data)


def decode(text: str) -> bytes:
    return from_base64(text)


def asset_to_data_url(asset) -> str:
    """Render a SourceAsset or ResultAsset as a ``data:`` URL for previews and downloads."""
    return to_data_url(asset.data, asset.media_type)


def ingest_data_url(url: str) -> SourceAsset:
    """Ingest a ``data:`` URL, as produced by browser file readers."""
    try:
        data, media_type = parse_data_url(url)
    except ValueError as e:
        raise InvalidFileType(INVALID_FILE_TYPE_MESSAGE) from e
    return ingest(data, media_type)
