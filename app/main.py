import json
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles

from app.core.config import Settings, get_settings
from app.schemas.response import GenerationResult
from app.security.headers import apply_security_headers
from app.security.rate_guard import RateLimiter, check_body_size, check_content_length, client_ip
from app.services.prompt_service import PromptGenerator
from app.utils.logger import configure_logging, logger

API_PREFIX = "/api/"


def _load_payload(raw: bytes) -> dict:
    if not raw:
        return {}
    try:
        payload = json.loads(raw)
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


def create_app(settings: Settings | None = None, generator: PromptGenerator | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    generator = generator or PromptGenerator(settings)
    limiter = RateLimiter(settings.rate_limit_requests, settings.rate_limit_window_sec)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not settings.has_gemini_key:
            logger.warning("gemini_key_missing", extra={"fallback": "local_assembly"})
        yield
        await generator.close()

    app = FastAPI(title="Prompt Builder", lifespan=lifespan)
    app.state.settings = settings
    app.state.generator = generator
    app.state.rate_limiter = limiter

    @app.middleware("http")
    async def guard(request: Request, call_next):
        decision = None
        if request.url.path.startswith(API_PREFIX):
            ip = client_ip(request, settings.trust_proxy)
            decision = await limiter.hit(ip)
            if not decision.allowed:
                logger.warning("rate_limited", extra={"ip": ip, "path": request.url.path})
                response = JSONResponse(status_code=429, content={"detail": "Rate limit exceeded"})
                response.headers.update(decision.headers())
                apply_security_headers(response.headers)
                return response
        response = await call_next(request)
        if decision is not None:
            response.headers.update(decision.headers())
        apply_security_headers(response.headers)
        return response

    # outermost: preflights end here and never reach the limiter
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/healthz", response_class=PlainTextResponse)
    async def healthz() -> str:
        return "ok"

    @app.post("/api/generate", response_model=GenerationResult)
    async def post_generate(request: Request) -> GenerationResult:
        try:
            check_content_length(request.headers.get("content-length"))
            raw = await request.body()
            check_body_size(raw)
        except ValueError as e:
            raise HTTPException(status_code=413, detail=str(e))
        payload = _load_payload(raw)
        return await generator.generate(payload.get("mode"), payload)

    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(static_dir), html=True), name="static")
    else:
        @app.get("/")
        async def root():
            return {"message": "Prompt Builder API", "health": "/healthz", "generate": "POST /api/generate"}

    return app


def main() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("app.main:create_app", factory=True, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
