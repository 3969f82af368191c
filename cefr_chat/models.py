# cefr_chat/models.py
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator


class ChatTurn(BaseModel):
    role: str = Field(..., description="'user', 'assistant' or 'system'")
    content: str


class ChatRequest(BaseModel):
    history: Optional[List[ChatTurn]] = Field(
        default=None,
        description="Whole conversation so far (frontend-managed); wins over message",
    )
    message: Optional[str] = Field(default=None, description="Single latest utterance")

    @field_validator("history", mode="before")
    @classmethod
    def _drop_non_list_history(cls, value: Any) -> Any:
        # anything but a list counts as no history
        return value if isinstance(value, list) else None

    def latest_utterance(self) -> Optional[str]:
        if self.history:
            return self.history[-1].content
        if self.message:
            return self.message
        return None
