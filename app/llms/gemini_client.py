# =============================================================================
# app/llms/gemini_client.py — Google Gemini generateContent client
# =============================================================================
# One attempt per call, no retry. Non-2xx → GenerationError; transport and
# JSON errors propagate to the caller unchanged.
# =============================================================================

import httpx

from app.core.config import Settings
from app.core.security import require_gemini_key
from app.llms.base import BaseLLM, GenerationError

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"
TOP_P = 0.95
TOP_K = 40
MAX_OUTPUT_TOKENS = 1024


def build_payload(system_hint: str, user_task: str, temperature: float) -> dict:
    return {
        "contents": [
            {"role": "user", "parts": [{"text": f"{system_hint}\n\n{user_task}"}]},
        ],
        "generationConfig": {
            "temperature": temperature,
            "topP": TOP_P,
            "topK": TOP_K,
            "maxOutputTokens": MAX_OUTPUT_TOKENS,
        },
    }


def extract_text(data: object) -> str:
    if not isinstance(data, dict):
        return ""
    candidates = data.get("candidates") or []
    if not candidates or not isinstance(candidates[0], dict):
        return ""
    content = candidates[0].get("content")
    if not isinstance(content, dict):
        return ""
    parts = content.get("parts") or []
    texts = [p.get("text") for p in parts if isinstance(p, dict)]
    return "\n".join(t for t in texts if isinstance(t, str) and t)


class GeminiClient(BaseLLM):
    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self.model = settings.model_id
        self._client: httpx.AsyncClient | None = None

    @property
    def endpoint(self) -> str:
        return f"{GEMINI_BASE_URL}/{self.model}:generateContent"

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self._settings.request_timeout)
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def generate(self, system_hint: str, user_task: str, temperature: float) -> str:
        key = require_gemini_key(self._settings)
        client = await self._get_client()
        r = await client.post(
            self.endpoint,
            headers={"x-goog-api-key": key},
            json=build_payload(system_hint, user_task, temperature),
        )
        if not r.is_success:
            raise GenerationError(r.status_code, r.text or "")
        return extract_text(r.json())
