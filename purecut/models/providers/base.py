from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Any, Optional, Tuple, Union

#unified model errors
class ModelError(RuntimeError): ...
class ModelTimeout(ModelError): ...

@dataclass(frozen=True)
class TextPart:
    text: str

@dataclass(frozen=True)
class InlineImagePart:
    data: str #base64 transport text, as it travels on the wire
    media_type: str

Part = Union[TextPart, InlineImagePart]

@dataclass(frozen=True)
class ModelRequest:
    model: str
    parts: Tuple[Part, ...]
    params: Dict[str, Any] | None = None #provider generation config (e.g. response_modalities)

@dataclass(frozen=True)
class Candidate:
    parts: Tuple[Part, ...] = ()

@dataclass(frozen=True)
class ModelReply:
    candidates: Tuple[Candidate, ...] = ()
    raw: Any = None #provider-native response obj/dict
    meta: Dict[str, Any] = field(default_factory=dict) #latency, model, finish reason, etc.

    @property
    def first_parts(self) -> Tuple[Part, ...]:
        """Parts of the first candidate, or an empty tuple when the reply has none."""
        if not self.candidates:
            return ()
        return self.candidates[0].parts

class ModelProvider(ABC):
    @abstractmethod
    async def generate(self, req: ModelRequest) -> ModelReply:
        raise NotImplementedError

    @abstractmethod
    def health_check(self) -> bool:
        raise NotImplementedError

    def cleanup(self) -> None:
        pass
