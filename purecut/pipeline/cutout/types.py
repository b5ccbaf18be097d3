from dataclasses import dataclass, field
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict

RESULT_MEDIA_TYPE = "image/png"
RESULT_FILENAME = "purecut-result.png"

class PipelineState(Enum):
    IDLE = "idle"
    LOADED = "loaded"
    PROCESSING = "processing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

class ErrorKind(Enum):
    INVALID_FILE_TYPE = "invalid_file_type"
    TRANSPORT_ERROR = "transport_error"
    NO_IMAGE_RETURNED = "no_image_returned"

class ErrorRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    message: str

# Errors
class CutoutError(Exception):
    kind: Optional[ErrorKind] = None

    def to_record(self) -> ErrorRecord:
        return ErrorRecord(kind=self.kind, message=str(self))

class InvalidFileType(CutoutError):
    kind = ErrorKind.INVALID_FILE_TYPE

class TransportError(CutoutError):
    kind = ErrorKind.TRANSPORT_ERROR

class NoImageReturned(CutoutError):
    kind = ErrorKind.NO_IMAGE_RETURNED

class NoResultAvailable(Exception):
    """Raised when a result is requested before a removal has succeeded. Never becomes an ErrorRecord."""

# Assets
@dataclass(frozen=True)
class SourceAsset:
    data: bytes = field(repr=False)
    media_type: str
    encoded: str = field(repr=False) #base64 transport text

    @property
    def size(self) -> int:
        return len(self.data)

@dataclass(frozen=True)
class ResultAsset:
    data: bytes = field(repr=False)
    media_type: str = RESULT_MEDIA_TYPE

    @property
    def size(self) -> int:
        return len(self.data)

@dataclass(frozen=True)
class PipelineSnapshot:
    """Read-only copy of the controller state handed back to callers."""
    state: PipelineState
    source: Optional[SourceAsset] = None
    result: Optional[ResultAsset] = None
    error: Optional[ErrorRecord] = None
    generation: int = 0
