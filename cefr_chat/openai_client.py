# cefr_chat/openai_client.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx
from openai import APIStatusError, AsyncOpenAI

from . import config

logger = logging.getLogger(__name__)

FALLBACK_REPLY = "I couldn't generate a response."


class UpstreamError(Exception):
    """The completion API answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"completion API returned {status_code}")
        self.status_code = status_code
        self.body = body


def extract_reply(data: Any) -> str:
    """choices[0].message.content, or the fallback line when the model gave nothing."""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        content = None
    return content or FALLBACK_REPLY


class CompletionClient:
    """
    Thin async wrapper over the Chat Completions endpoint.
    No retries: a failed call is reported to the caller once.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.model = model or config.CHAT_MODEL
        self._client = AsyncOpenAI(
            api_key=api_key if api_key is not None else config.OPENAI_API_KEY,
            base_url=base_url or config.OPENAI_BASE_URL,
            max_retries=0,
            http_client=http_client,
        )

    async def complete(self, messages: List[Dict[str, str]]) -> str:
        logger.info("[openai] model=%s turns=%d", self.model, len(messages))
        try:
            raw = await self._client.chat.completions.with_raw_response.create(
                model=self.model,
                messages=messages,
                max_tokens=config.MAX_TOKENS,
                temperature=config.TEMPERATURE,
            )
        except APIStatusError as e:
            raise UpstreamError(e.status_code, e.response.text) from e
        # raw JSON so a 2xx body without choices is still readable
        return extract_reply(raw.http_response.json())

    async def aclose(self) -> None:
        await self._client.close()
