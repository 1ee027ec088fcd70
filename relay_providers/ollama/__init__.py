"""Ollama native backend."""

from .client import OllamaBackend

__all__ = ["OllamaBackend"]
