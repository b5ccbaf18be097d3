from __future__ import annotations
from pathlib import Path
from typing import Tuple, Union
import base64
import binascii
import re

_DATA_URL_RE = re.compile(r"^data:(?P<media_type>[^;,]+)(?P<params>(;[^;,]+)*);base64,(?P<payload>.*)$", re.DOTALL)


def to_base64(image_data: Union[str, Path, bytes]) -> str:
    if isinstance(image_data, (str, Path)):
        path = Path(image_data)
        if not path.exists():
            raise FileNotFoundError(f"Image file not found: {image_data}")
        return base64.b64encode(path.read_bytes()).decode('utf-8')

    elif isinstance(image_data, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(image_data)).decode('utf-8')

    else:
        raise ValueError(f"Unsupported image data type: {type(image_data)}")


def from_base64(text: Union[str, bytes]) -> bytes:
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Invalid base64 image data: {e}") from e


def to_data_url(image_data: bytes, media_type: str) -> str:
    return f"data:{media_type};base64,{to_base64(image_data)}"


def parse_data_url(url: str) -> Tuple[bytes, str]:
    """Split a ``data:<type>;base64,<payload>`` URL into raw bytes and media type."""
    match = _DATA_URL_RE.match(url.strip()) if url else None
    if match is None:
        raise ValueError("Not a base64 data URL")
    return from_base64(match.group("payload")), match.group("media_type")
