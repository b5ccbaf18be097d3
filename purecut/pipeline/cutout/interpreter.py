import logging
from typing import Optional

from purecut.models.providers.base import ModelReply, InlineImagePart
from purecut.utils.image_converter import from_base64
from .types import ResultAsset, NoImageReturned, TransportError, RESULT_MEDIA_TYPE

logger = logging.getLogger(__name__)

NO_IMAGE_MESSAGE = "Failed to generate a cutout. The model did not return an image."


def first_inline_image(reply: ModelReply) -> Optional[InlineImagePart]:
    for part in reply.first_parts:
        if isinstance(part, InlineImagePart) and part.data:
            return part
    return None


def interpret(reply: ModelReply) -> ResultAsset:
    """
    Extract the cutout from a model reply.

    Only the first candidate is read and the first inline image in it wins;
    text commentary and any later images are dropped. The result is always
    labelled PNG, whatever media type the part declares.
    """
    part = first_inline_image(reply)
    if part is None:
        raise NoImageReturned(NO_IMAGE_MESSAGE)

    try:
        data = from_base64(part.data)
    except ValueError as e:
        raise TransportError(f"Malformed image data in model reply: {e}") from e

    if part.media_type and part.media_type != RESULT_MEDIA_TYPE:
        logger.info(f"Model returned {part.media_type}; exposing result as {RESULT_MEDIA_TYPE}")
    return ResultAsset(data=data)
