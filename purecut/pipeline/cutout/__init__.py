"""
Background-removal pipeline: codec, request builder, reply interpreter,
controller and view projection.
"""
from .controller import CutoutController, ResultExporter
from .types import (
    PipelineState, PipelineSnapshot, SourceAsset, ResultAsset, ErrorKind, ErrorRecord,
    CutoutError, InvalidFileType, TransportError, NoImageReturned, NoResultAvailable,
)
from .view import PipelineView, render
