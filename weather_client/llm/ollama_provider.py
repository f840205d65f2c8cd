"""
Ollama text-generation backend.

Used two ways:
  - generate(): one system + user prompt -> one completion. This is what
    answers the weather server's sampling requests.
  - chat(): a raw chat call with optional tool definitions, used by the
    tool-calling loop in chat mode.

Both are blocking (the Ollama SDK is synchronous); async callers go through
run_in_thread.
"""

from typing import List, Dict, Any, Optional

from ollama import chat

from ..config import OLLAMA_MODEL


class OllamaChatBackend:
    """
    Thin wrapper around `ollama.chat` bound to one model.

    Usage:
        backend = OllamaChatBackend(model="qwen3:8b")
        text = backend.generate("You are a poet!", "Write about rain")
    """

    def __init__(self, model: str = OLLAMA_MODEL):
        self.model = model

    def generate(self, system_prompt: str, user_text: str) -> Optional[str]:
        """Return the model's reply, or None if it produced no text."""
        messages: List[Dict[str, Any]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": user_text})

        print(f"[Ollama] Generating with '{self.model}' ({len(user_text)} chars of prompt)")
        response = chat(model=self.model, messages=messages)
        return response.message.content

    def chat(self, messages: List[Dict[str, Any]], tools: List[Dict] | None = None):
        """Raw chat call; returns the Ollama ChatResponse."""
        # think=False works around Ollama bug #10976 (think+tools=empty output)
        return chat(model=self.model, messages=messages, tools=tools, think=False)
