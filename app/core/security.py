from app.core.config import Settings


def require_gemini_key(settings: Settings) -> str:
    key = settings.gemini_api_key
    if not key or not key.strip():
        raise ValueError("GEMINI_API_KEY is not set")
    return key.strip()
