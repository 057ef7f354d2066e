from pydantic import BaseModel

from app.core.modes import Mode


class GenerationResult(BaseModel):
    model: str
    prompt: str
    mode: Mode
