"""
LLM backends for the weather client.
"""
from .ollama_provider import OllamaChatBackend

__all__ = ['OllamaChatBackend']
