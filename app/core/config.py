import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()

DEFAULT_MODEL_ID = "gemini-1.5-flash"


class Settings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 3000
    gemini_api_key: str = ""
    model_id: str = DEFAULT_MODEL_ID
    request_timeout: int = 30
    rate_limit_requests: int = 10
    rate_limit_window_sec: int = 60
    static_dir: str = "public"
    log_level: str = "INFO"
    trust_proxy: bool = False

    @property
    def has_gemini_key(self) -> bool:
        return bool(self.gemini_api_key and self.gemini_api_key.strip())

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3000")),
            gemini_api_key=os.getenv("GEMINI_API_KEY", ""),
            model_id=os.getenv("MODEL_ID", "") or DEFAULT_MODEL_ID,
            request_timeout=int(os.getenv("REQUEST_TIMEOUT", "30")),
            rate_limit_requests=int(os.getenv("RATE_LIMIT_REQUESTS", "10")),
            rate_limit_window_sec=int(os.getenv("RATE_LIMIT_WINDOW_SEC", "60")),
            static_dir=os.getenv("STATIC_DIR", "public"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            trust_proxy=os.getenv("TRUST_PROXY", "").strip().lower() in ("1", "true", "yes"),
        )


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
