"""LLM provider adapters.

Two concrete implementations of ILLMProvider (tokoro/interfaces/llm_provider.py):
    - OpenAILLMProvider: gpt-4o-mini (also supports OpenAI-compatible APIs)
    - OllamaLLMProvider: local models via Ollama server (llama3.1)

At startup, main.py creates the provider matching the available API key
(OPENAI_API_KEY) or Ollama URL.  With neither configured, tag generation
and search are disabled and answer 503.
"""

from tokoro.providers.llm.ollama_provider import OllamaLLMProvider
from tokoro.providers.llm.openai_provider import OpenAILLMProvider

__all__ = ["OllamaLLMProvider", "OpenAILLMProvider"]
