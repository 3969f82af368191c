"""
cefr_chat/main.py
English placement chat backend – FastAPI
"""

# =========================
# Standard & third-party
# =========================
import json
import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__, config
from .canned import cached_reply
from .models import ChatRequest
from .openai_client import CompletionClient, UpstreamError
from .prompting import PromptBuilder
from .session import resolve_version

# =========================
# Bootstrap / Config
# =========================
logging.basicConfig(
    level=config.LOG_LEVEL,
    format="[%(asctime)s] %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger("cefr_chat")

CHAT_PATH = "/api/chat"

prompts = PromptBuilder()


@lru_cache(maxsize=1)
def get_completion_client() -> CompletionClient:
    return CompletionClient()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("cefr_chat starting up (model=%s)", config.CHAT_MODEL)
    if not config.OPENAI_API_KEY:
        logger.warning("OPENAI_API_KEY is not set; completion calls will be rejected upstream")
    yield
    if get_completion_client.cache_info().currsize:
        await get_completion_client().aclose()
        get_completion_client.cache_clear()
    logger.info("cefr_chat shut down")


# =========================
# App (single instance)
# =========================
app = FastAPI(title="CEFR Placement Chat", version=__version__, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _json(payload: dict, status_code: int = 200, set_cookie: Optional[str] = None) -> JSONResponse:
    headers = {"Set-Cookie": set_cookie} if set_cookie else None
    return JSONResponse(payload, status_code=status_code, headers=headers)


async def _read_body(request: Request) -> dict:
    raw = await request.body()
    if not raw.strip():
        return {}
    data = json.loads(raw)
    return data if isinstance(data, dict) else {}


@app.exception_handler(StarletteHTTPException)
async def method_gate(request: Request, exc: StarletteHTTPException):
    """Any method other than POST on the chat route: 405, Allow: POST."""
    if exc.status_code == 405 and request.url.path == CHAT_PATH:
        return JSONResponse(
            {"error": "Method not allowed"}, status_code=405, headers={"Allow": "POST"}
        )
    return await http_exception_handler(request, exc)


# =========================
# Health
# =========================
@app.get("/health")
async def health():
    return {
        "ok": True,
        "status": "healthy",
        "api_key_present": bool(config.OPENAI_API_KEY),
    }


# =========================
# /api/chat – placement conversation
# =========================
@app.post(CHAT_PATH)
async def chat(request: Request, client: CompletionClient = Depends(get_completion_client)):
    """
    Body: { history?: [{role, content}, ...], message?: str }
    Returns: { reply } | { error, details? }
    Sets cefr_version cookie the first time a visitor is seen.
    """
    try:
        version, set_cookie = resolve_version(request.headers.get("cookie", ""))

        body = ChatRequest.model_validate(await _read_body(request))
        utterance = body.latest_utterance()
        if utterance is None:
            return _json({"error": "No message or history provided"}, 400)

        canned = cached_reply(utterance)
        if canned is not None:
            logger.info("[chat] cached reply for %r", utterance.lower().strip())
            return _json({"reply": canned}, 200, set_cookie)

        messages = prompts.build_messages(
            version=version,
            history=[t.model_dump() for t in body.history or []],
            message=body.message,
        )

        try:
            reply = await client.complete(messages)
        except UpstreamError as e:
            logger.error("[chat] OpenAI error: %s %s", e.status_code, e.body)
            return _json({"error": "AI service error", "details": e.body}, 502, set_cookie)

        return _json({"reply": reply}, 200, set_cookie)

    except Exception:
        logger.exception("[chat] exception")
        return _json({"error": "Server error"}, 500)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("cefr_chat.main:app", host="0.0.0.0", port=8000)
