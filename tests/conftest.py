"""Shared fixtures: a scripted stand-in for the Ollama client and test settings."""

from typing import Callable, Dict, List, Tuple, Union

import pytest

from rfp_dataset.config import Settings

Reply = Union[str, Exception, Callable[[str], str]]

SECTIONS = "sections"
RELEVANCE = "relevance"
ANSWER = "answer"


def classify_prompt(prompt: str) -> str:
    if "Return a valid JSON array of strings" in prompt:
        return SECTIONS
    if "Respond with only \"YES\" or \"NO\"" in prompt:
        return RELEVANCE
    if "Relevant Proposal Text:" in prompt:
        return ANSWER
    raise AssertionError(f"Unexpected prompt: {prompt[:80]!r}")


class ScriptedClient:
    """Answers each prompt kind from a reply, a list of replies, or a callable.

    An Exception instance as a reply is raised instead of returned.
    """

    def __init__(self, **replies: Union[Reply, List[Reply]]) -> None:
        self.replies: Dict[str, Union[Reply, List[Reply]]] = {
            SECTIONS: "[]",
            RELEVANCE: "NO",
            ANSWER: "",
        }
        self.replies.update(replies)
        self.calls: List[Tuple[str, str, bool]] = []

    def generate(self, prompt: str, json_mode: bool = False) -> str:
        kind = classify_prompt(prompt)
        self.calls.append((kind, prompt, json_mode))
        reply = self.replies[kind]
        if isinstance(reply, list):
            reply = reply.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            return reply(prompt)
        return reply

    def count(self, kind: str) -> int:
        return sum(1 for call in self.calls if call[0] == kind)


@pytest.fixture
def test_settings():
    return Settings(_env_file=None, warn_on_context_overflow=False)


@pytest.fixture
def scripted_client():
    return ScriptedClient
