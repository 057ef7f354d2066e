# =============================================================================
# app/services/spec_assembler.py — Fields → spec text + model instructions
# =============================================================================
# Pure and deterministic: the same fields always produce byte-identical
# spec_text, system_hint and user_task.
# =============================================================================

from typing import NamedTuple

from pydantic import BaseModel

from app.core.modes import (
    COMMON_REQUIREMENTS,
    FIELD_TABLES,
    MODE_REQUIREMENTS,
    SYSTEM_HINTS,
    USER_TASK_TEMPLATE,
    Mode,
    normalize_mode,
)
from app.schemas.request import BaseFields


class AssembledSpec(NamedTuple):
    spec_text: str
    system_hint: str
    user_task: str


def build_spec_lines(mode: Mode, values: dict[str, str]) -> list[str]:
    lines = []
    for field, label in FIELD_TABLES[mode]:
        value = (values.get(field) or "").strip()
        if value:
            lines.append(f"{label}: {value}")
    return lines


def build_user_task(mode: Mode, base: BaseFields, spec_text: str) -> str:
    head = USER_TASK_TEMPLATE.format(
        language=base.language,
        tone=base.tone,
        length_pref=base.length_pref,
        spec_text=spec_text,
    )
    requirements = [*COMMON_REQUIREMENTS, *MODE_REQUIREMENTS[mode]]
    numbered = "\n".join(f"{i}) {req}" for i, req in enumerate(requirements, start=1))
    return head + numbered


def assemble(
    mode: str,
    base_fields: BaseFields,
    mode_fields: BaseModel | None = None,
) -> AssembledSpec:
    resolved = normalize_mode(mode)
    values: dict[str, str] = base_fields.model_dump()
    if mode_fields is not None:
        values.update(mode_fields.model_dump())
    spec_text = "\n".join(build_spec_lines(resolved, values))
    return AssembledSpec(
        spec_text=spec_text,
        system_hint=SYSTEM_HINTS[resolved],
        user_task=build_user_task(resolved, base_fields, spec_text),
    )
