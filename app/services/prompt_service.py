# =============================================================================
# app/services/prompt_service.py — Generation orchestrator with local fallback
# =============================================================================
# Every path ends in a GenerationResult:
#   no key        → "FINAL PROMPT\n\n" + spec            (model=local-fallback)
#   empty answer  → "FINAL PROMPT\n\n" + spec            (model=<model id>)
#   any exception → "FINAL PROMPT\n\n" + apology message (model=local-fallback)
# =============================================================================

from collections.abc import Mapping
from typing import Any

from app.core.config import Settings
from app.core.modes import (
    ERROR_FALLBACK_MESSAGE,
    FINAL_PROMPT_HEADER,
    LOCAL_FALLBACK_MODEL,
    normalize_mode,
)
from app.llms.base import BaseLLM
from app.llms.gemini_client import GeminiClient
from app.schemas.request import GenerateRequest
from app.schemas.response import GenerationResult
from app.services.spec_assembler import assemble
from app.utils.logger import logger

MIN_TEMPERATURE = 0.0
MAX_TEMPERATURE = 2.0


def with_header(body: str) -> str:
    return f"{FINAL_PROMPT_HEADER}\n\n{body}"


def clamp_temperature(value: float) -> float:
    return min(MAX_TEMPERATURE, max(MIN_TEMPERATURE, value))


class PromptGenerator:
    def __init__(self, settings: Settings, llm: BaseLLM | None = None) -> None:
        self._settings = settings
        self._llm = llm if llm is not None else GeminiClient(settings)

    async def close(self) -> None:
        await self._llm.close()

    async def generate(self, mode: Any, fields: Mapping[str, Any] | None) -> GenerationResult:
        resolved_mode = normalize_mode(mode)
        try:
            request = GenerateRequest.from_payload(fields, mode=resolved_mode)
            spec_text, system_hint, user_task = assemble(
                request.mode, request.base, request.mode_fields
            )
            if not self._settings.has_gemini_key:
                logger.info(
                    "prompt_generated",
                    extra={"mode": resolved_mode, "model": LOCAL_FALLBACK_MODEL, "source": "no_key"},
                )
                return GenerationResult(
                    model=LOCAL_FALLBACK_MODEL,
                    prompt=with_header(spec_text),
                    mode=resolved_mode,
                )

            text = await self._llm.generate(
                system_hint,
                user_task,
                clamp_temperature(request.creativity),
            )
            if text and text.strip():
                prompt, source = text.strip(), "remote"
            else:
                prompt, source = with_header(spec_text), "empty_response"
            logger.info(
                "prompt_generated",
                extra={"mode": resolved_mode, "model": self._llm.model, "source": source},
            )
            return GenerationResult(model=self._llm.model, prompt=prompt, mode=resolved_mode)
        except Exception as e:
            logger.exception(
                "generation_failed",
                extra={"mode": resolved_mode, "error": type(e).__name__},
            )
            return GenerationResult(
                model=LOCAL_FALLBACK_MODEL,
                prompt=with_header(ERROR_FALLBACK_MESSAGE),
                mode=resolved_mode,
            )
