import math
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from app.core.modes import (
    DEFAULT_CREATIVITY,
    DEFAULT_LANGUAGE,
    DEFAULT_LENGTH_PREF,
    DEFAULT_TONE,
    Mode,
    normalize_mode,
)


def parse_creativity(value: Any) -> float:
    """Parse the sampling temperature, falling back to 0.3 on anything unusable."""
    if value is None or isinstance(value, bool):
        return DEFAULT_CREATIVITY
    try:
        parsed = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        return DEFAULT_CREATIVITY
    if not math.isfinite(parsed):
        return DEFAULT_CREATIVITY
    return parsed


class _TextFields(BaseModel):
    # JSON keys are camelCase (lengthPref, errorMessage, ...)
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        if isinstance(value, str):
            return value.strip()
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return ""


class BaseFields(_TextFields):
    goal: str = ""
    audience: str = ""
    scope: str = ""
    tools: str = ""
    output: str = ""
    format: str = ""
    examples: str = ""
    donts: str = ""
    language: str = DEFAULT_LANGUAGE
    tone: str = DEFAULT_TONE
    length_pref: str = DEFAULT_LENGTH_PREF


class CodingFields(_TextFields):
    code_language: str = ""
    runtime_env: str = ""
    repo_url: str = ""
    entry_point: str = ""
    error_message: str = ""
    expected_behavior: str = ""
    test_inputs: str = ""
    performance_target: str = ""


class MediaFields(_TextFields):
    media_type: str = ""
    purpose: str = ""
    style: str = ""
    resolution: str = ""
    aspect_ratio: str = ""
    color_palette: str = ""
    camera: str = ""
    duration: str = ""
    platform: str = ""
    references: str = ""
    negative: str = ""


class GenerateRequest(BaseModel):
    mode: Mode = "general"
    creativity: float = DEFAULT_CREATIVITY
    base: BaseFields = BaseFields()
    coding: CodingFields = CodingFields()
    media: MediaFields = MediaFields()

    @property
    def mode_fields(self) -> CodingFields | MediaFields | None:
        if self.mode == "coding":
            return self.coding
        if self.mode == "media":
            return self.media
        return None

    @classmethod
    def from_payload(cls, payload: Any, mode: Any = None) -> "GenerateRequest":
        data: dict[str, Any] = {}
        if isinstance(payload, Mapping):
            # null behaves like an absent key so base defaults still apply
            data = {str(k): v for k, v in payload.items() if v is not None}
        if mode is None:
            mode = data.get("mode")
        return cls(
            mode=normalize_mode(mode),
            creativity=parse_creativity(data.get("creativity")),
            base=BaseFields.model_validate(data),
            coding=CodingFields.model_validate(data),
            media=MediaFields.model_validate(data),
        )
