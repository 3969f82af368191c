# cefr_chat/session.py
"""
Visitor session = one cookie holding the assigned question set (1-4).
Nothing is stored server-side.
"""
from __future__ import annotations

import logging
import random
from typing import Dict, Optional, Tuple
from urllib.parse import unquote

from . import config
from .prompting import VERSIONS

logger = logging.getLogger(__name__)


def parse_cookies(cookie_header: str = "") -> Dict[str, str]:
    """Split a raw Cookie header into {name: url-decoded value}."""
    cookies: Dict[str, str] = {}
    for pair in (cookie_header or "").split(";"):
        pair = pair.strip()
        if not pair or "=" not in pair:
            continue
        name, _, value = pair.partition("=")
        name = name.strip()
        if not name:
            continue
        cookies[name] = unquote(value.strip())
    return cookies


def _valid_version(raw: Optional[str]) -> Optional[int]:
    if not raw:
        return None
    try:
        version = int(raw)
    except ValueError:
        return None
    return version if version in VERSIONS else None


def version_cookie(version: int) -> str:
    return (
        f"{config.VERSION_COOKIE}={version}; Path=/; "
        f"Max-Age={config.VERSION_COOKIE_MAX_AGE}; SameSite=Lax; Secure"
    )


def resolve_version(cookie_header: str = "") -> Tuple[int, Optional[str]]:
    """
    Returns (version, set_cookie_header).
    set_cookie_header is None when the visitor already carries a valid version.
    """
    cookies = parse_cookies(cookie_header)
    version = _valid_version(cookies.get(config.VERSION_COOKIE))
    if version is not None:
        return version, None

    version = random.choice(list(VERSIONS))
    logger.info("[session] assigned question set %s", version)
    return version, version_cookie(version)
