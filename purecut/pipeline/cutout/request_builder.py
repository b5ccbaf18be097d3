from typing import Any, Dict, Optional

from purecut.models.providers.base import ModelRequest, InlineImagePart, TextPart
from purecut.models.prompts import REMOVE_BACKGROUND_INSTRUCTION
from .types import SourceAsset

DEFAULT_MODEL = "gemini-2.5-flash-image"


def build_request(asset: SourceAsset, model: str = DEFAULT_MODEL, params: Optional[Dict[str, Any]] = None) -> ModelRequest:
    """
    Image first, instruction second. The instruction is fixed; only the
    model name and provider params come from configuration.
    """
    return ModelRequest(
        model=model,
        parts=(
            InlineImagePart(data=asset.encoded, media_type=asset.media_type),
            TextPart(text=REMOVE_BACKGROUND_INSTRUCTION),
        ),
        params=dict(params) if params else None,
    )
