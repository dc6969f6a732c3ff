"""Training record models and their chat-format rendering."""

from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel

USER_PROMPT_PREFIX = "Write a proposal section based on this RFP section:\n\n"


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class TrainingExample(BaseModel):
    """One line of the fine-tuning file."""

    messages: List[ChatMessage]


class TrainingRecord(BaseModel):
    """An RFP requirement paired with the proposal text that answers it."""

    requirement: str
    answer: str

    def to_example(self) -> TrainingExample:
        return TrainingExample(
            messages=[
                ChatMessage(role="user", content=f"{USER_PROMPT_PREFIX}{self.requirement}"),
                ChatMessage(role="assistant", content=self.answer),
            ]
        )
