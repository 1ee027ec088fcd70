"""Token usage helpers package."""

from .extraction import extract_ollama_usage, extract_openai_usage

__all__ = ["extract_openai_usage", "extract_ollama_usage"]
