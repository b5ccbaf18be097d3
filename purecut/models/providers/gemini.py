from __future__ import annotations
from typing import Any, Dict, List, Optional
import logging
import time
from os import getenv

import httpx
from google import genai
from google.genai import errors, types

from .base import ModelProvider, ModelRequest, ModelReply, Candidate, InlineImagePart, TextPart, Part, ModelError, ModelTimeout
from ...utils.image_converter import to_base64, from_base64

logger = logging.getLogger(__name__)

DEFAULT_API_KEY_ENVS = ("GEMINI_API_KEY", "GOOGLE_API_KEY")


class GeminiProvider(ModelProvider):
    def __init__(self, api_key: Optional[str] = None, api_key_env: Optional[str] = None, timeout: float = 120.0, **kwargs):
        env_names = (api_key_env,) if api_key_env else DEFAULT_API_KEY_ENVS
        self.api_key = api_key or next((getenv(name) for name in env_names if getenv(name)), None)
        self.timeout = timeout
        self._client_kwargs = kwargs
        self._client: Optional[genai.Client] = None #built on first use so a missing key fails the call, not startup

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            if not self.api_key:
                raise ModelError("Gemini API key is not configured (set GEMINI_API_KEY)")
            self._client = genai.Client(
                api_key=self.api_key,
                http_options=types.HttpOptions(timeout=int(self.timeout * 1000)),
                **self._client_kwargs
            )
        return self._client

    def _format_parts(self, parts: tuple) -> List[types.Part]:
        formatted = []
        for part in parts:
            if isinstance(part, InlineImagePart):
                try:
                    data = from_base64(part.data)
                except ValueError as e:
                    raise ModelError(f"Failed to convert image for Gemini: {e}") from e
                formatted.append(types.Part.from_bytes(data=data, mime_type=part.media_type))
            elif isinstance(part, TextPart):
                formatted.append(types.Part.from_text(text=part.text))
            else:
                raise ModelError(f"Unsupported request part: {type(part).__name__}")
        return formatted

    @staticmethod
    def _convert_part(part: Any) -> Optional[Part]:
        inline = getattr(part, "inline_data", None)
        data = getattr(inline, "data", None) if inline is not None else None
        if data:
            encoded = data if isinstance(data, str) else to_base64(data)
            return InlineImagePart(data=encoded, media_type=getattr(inline, "mime_type", None) or "image/png")
        text = getattr(part, "text", None)
        if text:
            return TextPart(text=text)
        return None #thought signatures, function calls, etc.

    @classmethod
    def _convert_response(cls, response: Any) -> tuple:
        candidates = []
        for candidate in getattr(response, "candidates", None) or []:
            content = getattr(candidate, "content", None)
            raw_parts = (getattr(content, "parts", None) or []) if content is not None else []
            parts = tuple(p for p in (cls._convert_part(rp) for rp in raw_parts) if p is not None)
            candidates.append(Candidate(parts=parts))
        return tuple(candidates)

    async def generate(self, req: ModelRequest) -> ModelReply:
        contents = [types.Content(role="user", parts=self._format_parts(req.parts))]
        config = types.GenerateContentConfig(**req.params) if req.params else None

        t0 = time.perf_counter()
        try:
            response = await self.client.aio.models.generate_content(
                model=req.model,
                contents=contents,
                config=config,
            )
        except ModelError:
            raise
        except httpx.TimeoutException as e:
            raise ModelTimeout(f"Gemini timeout after {self.timeout}s: {e}") from e
        except errors.APIError as e:
            raise ModelError(f"Gemini API error {e.code}: {e.message}") from e
        except Exception as e:
            raise ModelError(f"Gemini request failed: {e}") from e

        dt = time.perf_counter() - t0

        try:
            candidates = self._convert_response(response)
        except Exception as e:
            raise ModelError(f"Invalid response structure from Gemini API: {e}") from e

        meta: Dict[str, Any] = {
            "provider": "gemini",
            "model": getattr(response, "model_version", None) or req.model,
            "latency": dt,
            "candidate_count": len(candidates),
        }
        if candidates:
            finish_reason = getattr(response.candidates[0], "finish_reason", None)
            if finish_reason is not None:
                meta["finish_reason"] = getattr(finish_reason, "value", str(finish_reason))

        usage = getattr(response, "usage_metadata", None)
        if usage is not None and hasattr(usage, "model_dump"):
            meta["usage"] = usage.model_dump(exclude_none=True)

        logger.info(f"Gemini reply from {meta['model']}: {len(candidates)} candidate(s) in {dt:.2f}s")
        return ModelReply(candidates=candidates, raw=response, meta=meta)

    def health_check(self) -> bool:
        """SYNCHRONOUS health check - blocks until complete"""
        try:
            _ = self.client.models.list()
            return True
        except Exception:
            return False

    def cleanup(self) -> None:
        self._client = None
