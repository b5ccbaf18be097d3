"""
Background-removal pipeline controller.

Owns the one PipelineState for the session and is the only place it changes.
UI code drives it through three entry points (ingest_file, start_removal,
reset) and renders whatever snapshot comes back.

Every outgoing request is stamped with a generation number. A reset or a new
ingestion bumps the generation, so a reply that lands afterwards is discarded
instead of overwriting the newer state. If the awaiting task is cancelled
the current request fails so the loaded image can be retried.
"""
from __future__ import annotations

import asyncio
import functools
import logging
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, Optional, Protocol, Union

from purecut.models.manager import ModelManager
from purecut.models.providers.base import ModelRequest, ModelReply, ModelError
from . import codec
from .interpreter import interpret
from .request_builder import build_request, DEFAULT_MODEL
from .types import (
    PipelineState, PipelineSnapshot, SourceAsset, ResultAsset, ErrorRecord, ErrorKind,
    CutoutError, InvalidFileType, NoResultAvailable, RESULT_FILENAME,
)
from .view import PipelineView, render

logger = logging.getLogger(__name__)

REMOVE_BACKGROUND_TASK = "remove_background"
GENERIC_FAILURE_MESSAGE = "An error occurred while processing the image."
CANCELLED_MESSAGE = "Background removal was cancelled."

GenerateFn = Callable[[ModelRequest], Awaitable[ModelReply]]

_TRIGGERABLE = (PipelineState.LOADED, PipelineState.FAILED)


class ResultExporter(Protocol):
    def export(self, result: ResultAsset, filename: str) -> Any: ...


class CutoutController:
    def __init__(self, generate: GenerateFn, model: str = DEFAULT_MODEL, params: Optional[Dict[str, Any]] = None):
        self._generate = generate
        self.model = model
        self.params = params
        self._state = PipelineState.IDLE
        self._source: Optional[SourceAsset] = None
        self._result: Optional[ResultAsset] = None
        self._error: Optional[ErrorRecord] = None
        self._generation = 0

    @classmethod
    def from_manager(cls, manager: ModelManager, task: str = REMOVE_BACKGROUND_TASK) -> "CutoutController":
        task_cfg = manager.task_config(task)
        return cls(functools.partial(manager.call, task), model=task_cfg.model, params=task_cfg.params)

    @classmethod
    def from_config(cls, config_path: Union[Path, str, None] = None) -> "CutoutController":
        return cls.from_manager(ModelManager(config_path))

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def snapshot(self) -> PipelineSnapshot:
        return PipelineSnapshot(
            state=self._state,
            source=self._source,
            result=self._result,
            error=self._error,
            generation=self._generation,
        )

    @property
    def view(self) -> PipelineView:
        return render(self.snapshot)

    def _clear(self) -> None:
        self._source = None
        self._result = None
        self._error = None
        self._generation += 1

    def ingest_file(self, data: bytes, declared_type: str) -> PipelineSnapshot:
        try:
            asset = codec.ingest(data, declared_type)
        except InvalidFileType as e:
            logger.warning(f"Rejected upload with media type {declared_type!r}")
            self._error = e.to_record()
            return self.snapshot

        self._clear()
        self._source = asset
        self._state = PipelineState.LOADED
        logger.info(f"Loaded {asset.media_type} image ({asset.size} bytes), generation {self._generation}")
        return self.snapshot

    def reset(self) -> PipelineSnapshot:
        if self._state is PipelineState.PROCESSING:
            logger.info(f"Reset while processing; reply for generation {self._generation} will be discarded")
        self._clear()
        self._state = PipelineState.IDLE
        return self.snapshot

    async def start_removal(self) -> PipelineSnapshot:
        if self._state not in _TRIGGERABLE:
            logger.debug(f"start_removal ignored in state {self._state.value}")
            return self.snapshot

        self._generation += 1
        generation = self._generation
        self._state = PipelineState.PROCESSING
        self._result = None
        self._error = None
        request = build_request(self._source, model=self.model, params=self.params)
        logger.info(f"Requesting background removal from {request.model}, generation {generation}")

        result: Optional[ResultAsset] = None
        error: Optional[ErrorRecord] = None
        try:
            reply = await self._generate(request)
            result = interpret(reply)
        except asyncio.CancelledError:
            if generation == self._generation and self._state is PipelineState.PROCESSING:
                logger.warning(f"Background removal cancelled, generation {generation}")
                self._error = ErrorRecord(kind=ErrorKind.TRANSPORT_ERROR, message=CANCELLED_MESSAGE)
                self._state = PipelineState.FAILED
            raise
        except CutoutError as e:
            logger.error(f"Background removal failed: {e}")
            error = e.to_record()
        except ModelError as e:
            logger.error(f"Model call failed: {e}")
            error = ErrorRecord(kind=ErrorKind.TRANSPORT_ERROR, message=str(e) or GENERIC_FAILURE_MESSAGE)
        except Exception as e:
            logger.exception(f"Unexpected failure from model client: {e}")
            error = ErrorRecord(kind=ErrorKind.TRANSPORT_ERROR, message=str(e) or GENERIC_FAILURE_MESSAGE)

        if generation != self._generation or self._state is not PipelineState.PROCESSING:
            logger.warning(f"Discarding stale reply for generation {generation} (current {self._generation})")
            return self.snapshot

        if result is not None:
            self._result = result
            self._error = None
            self._state = PipelineState.SUCCEEDED
            logger.info(f"Cutout ready ({result.size} bytes)")
        else:
            self._error = error
            self._state = PipelineState.FAILED
        return self.snapshot

    def export_result(self, exporter: ResultExporter, filename: str = RESULT_FILENAME) -> Any:
        if self._state is not PipelineState.SUCCEEDED or self._result is None:
            raise NoResultAvailable("No background-removed image to export")
        return exporter.export(self._result, filename)
