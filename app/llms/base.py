from abc import ABC, abstractmethod


class GenerationError(Exception):
    """Remote generation endpoint answered with a non-success status."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Generation API error {status_code}: {body[:500]}")


class BaseLLM(ABC):
    model: str

    @abstractmethod
    async def generate(self, system_hint: str, user_task: str, temperature: float) -> str:
        """Return the generated text, or "" when the response carries none."""

    async def close(self) -> None:
        return None
