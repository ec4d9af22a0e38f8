"""Abstract base class for LLM service providers.

Defines the contract for the large-language-model backend behind tag
generation: a plain text completion plus a content moderation check.
Implementations wrap the OpenAI API or a local Ollama server; call sites
only ever see :class:`ILLMProvider`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


# Concrete implementations: OpenAILLMProvider, OllamaLLMProvider
# Located in: tokoro/providers/llm/
class ILLMProvider(ABC):
    """Contract for LLM services used by the tag generator."""

    @abstractmethod
    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.3,
        max_tokens: int = 4000,
    ) -> str:
        """Generate a text completion from the model.

        Parameters
        ----------
        system_prompt:
            The system/instruction message that sets the model's behaviour.
        user_prompt:
            The user-facing prompt containing the actual request.
        temperature:
            Sampling temperature (0.0 = deterministic, 1.0 = creative).
        max_tokens:
            Upper bound on the number of tokens in the response.

        Returns
        -------
        str
            The model's text response.

        Raises
        ------
        tokoro.utils.errors.ContentRefusedError
            If the model explicitly refuses the request.
        tokoro.utils.errors.LLMError
            If the API call fails or returns an empty response.
        """

    @abstractmethod
    async def moderate(self, text: str) -> bool:
        """Return ``True`` if *text* is flagged as inappropriate.

        Providers without a moderation endpoint return ``False``.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this LLM provider."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the provider is configured.

        Implementations check that credentials are present without making
        an inference call.
        """

    @abstractmethod
    async def validate_credentials(self) -> bool:
        """Perform a lightweight API call to confirm credentials are valid."""
