# cefr_chat/canned.py
from types import MappingProxyType
from typing import Optional

# Answered locally, no model call.
CACHED_REPLIES = MappingProxyType({
    "hello": "Hello! I’m your English Assistant. I’ll ask a few friendly questions to understand your English level.",
    "hi": "Hi there! Ready to test your English skills? Let's get started.",
    "help": "I’m here to help you assess your English level. Just type your message and I'll guide you.",
})


def cached_reply(text: Optional[str]) -> Optional[str]:
    """Exact match on the lowercased, trimmed utterance."""
    return CACHED_REPLIES.get((text or "").lower().strip())
