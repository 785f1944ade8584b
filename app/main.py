import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from api.v1 import chat, conversations, history, transactions, users, wallets
from app.config import get_settings
from app.core.langsmith import configure_langsmith
from app.core.logging import configure_logging
from app.core.middleware import RequestContextMiddleware

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str, details=None) -> JSONResponse:
    content = {"success": False, "error": message}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def create_app() -> FastAPI:
    configure_logging()
    configure_langsmith()

    app = FastAPI(title="Lucra AI", version="0.1.0")
    app.add_middleware(RequestContextMiddleware)

    for module in (chat, conversations, transactions, users, history, wallets):
        app.include_router(module.router, prefix="/v1")

    @app.exception_handler(HTTPException)
    async def http_error(request: Request, exc: HTTPException):
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        details = [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg")}
            for err in exc.errors()
        ]
        return _error(400, "Missing or invalid required fields", details)

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        logger.exception("unhandled error path=%s", request.url.path)
        return _error(500, "Internal server error")

    @app.get("/healthz")
    async def healthz():
        s = get_settings()
        return {
            "ok": True,
            "llm_model": s.LLM_MODEL,
            "llm_enabled": s.LLM_ENABLED,
            "llm_configured": bool(s.OPENAI_API_KEY),
            "db_configured": bool(s.DATABASE_URL),
        }

    return app


app = create_app()
