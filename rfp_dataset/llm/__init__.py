"""LLM integration helpers."""

from .ollama_client import OllamaClient
from .parsing import parse_json

__all__ = ["OllamaClient", "parse_json"]
