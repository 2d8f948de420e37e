import json
import logging
from typing import Any, Dict, Optional

import httpx

from config.settings import settings
from services.errors import InferenceError
from services.llm.base import TextGenerator

logger = logging.getLogger(__name__)


class OllamaClient(TextGenerator):
    """Ollama 호환 /api/generate 엔드포인트 클라이언트 (비스트리밍 단일 응답, 재시도 없음)"""

    def __init__(
        self,
        base_url: str,
        model: str,
        timeout: float,
        options: Optional[Dict[str, Any]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self.options = options or {}
        self._transport = transport

    @classmethod
    def from_settings(cls, transport: Optional[httpx.AsyncBaseTransport] = None) -> "OllamaClient":
        return cls(
            base_url=settings.LLM_API_BASE_URL,
            model=settings.LLM_MODEL,
            timeout=settings.LLM_TIMEOUT,
            options={
                "temperature": settings.LLM_TEMPERATURE,
                "top_k": settings.LLM_TOP_K,
                "top_p": settings.LLM_TOP_P,
                "repeat_penalty": settings.LLM_REPEAT_PENALTY,
                "num_predict": settings.LLM_MAX_TOKENS,
            },
            transport=transport,
        )

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            transport=self._transport,
        )

    async def generate(self, prompt: str) -> str:
        url = f"{self.base}/api/generate"
        payload = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "options": self.options,
        }
        logger.info("LLM request: model=%s, prompt=%d chars", self.model, len(prompt))

        try:
            async with self._client() as client:
                r = await client.post(url, json=payload)
                r.raise_for_status()
                data = r.json()
        except httpx.TimeoutException as e:
            logger.error("LLM request timed out: %s", e)
            raise InferenceError("Text generation service timed out") from e
        except httpx.HTTPStatusError as e:
            logger.error("LLM request failed (HTTP %s): %s", e.response.status_code, e.response.text)
            raise InferenceError(f"Text generation service error (HTTP {e.response.status_code})") from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error("LLM request failed: %s", e)
            raise InferenceError("Text generation service unreachable or returned invalid JSON") from e

        logger.debug("===== LLM RAW RESPONSE =====")
        logger.debug(json.dumps(data, ensure_ascii=False, indent=2))

        text = data.get("response") if isinstance(data, dict) else None
        if not isinstance(text, str):
            logger.error("LLM payload missing 'response' field")
            raise InferenceError("Text generation service returned no text")
        return text
