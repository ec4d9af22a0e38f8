"""OpenAI-compatible LLM provider adapter.

Wraps the ``openai`` async client to implement :class:`ILLMProvider`.
When a custom ``openai_base_url`` is configured (e.g. TogetherAI,
Fireworks), the client points at that URL instead of the default OpenAI
endpoint.  Moderation uses OpenAI's moderation endpoint, which
OpenAI-compatible hosts usually lack, so it is skipped for them.
"""

from __future__ import annotations

import openai
import structlog

from tokoro.config.settings import Settings
from tokoro.interfaces.llm_provider import ILLMProvider
from tokoro.utils.errors import ContentRefusedError, LLMError

logger = structlog.get_logger(logger_name=__name__)


class OpenAILLMProvider(ILLMProvider):
    """LLM provider backed by an OpenAI-compatible API.

    Uses ``gpt-4o-mini`` for completions by default; override with
    ``OPENAI_TEXT_MODEL`` or ``tags.model`` in config.yaml.
    """

    def __init__(self, settings: Settings, text_model: str = "") -> None:
        self._settings = settings
        self._api_key = settings.openai_api_key

        # 25s keeps the call inside typical 30s proxy request limits.
        client_kwargs: dict = {
            "api_key": self._api_key,
            "timeout": openai.Timeout(25.0, connect=5.0),
        }
        if settings.openai_base_url:
            client_kwargs["base_url"] = settings.openai_base_url

        self._client = openai.AsyncOpenAI(**client_kwargs)
        self._text_model = settings.openai_text_model or text_model or "gpt-4o-mini"
        self._has_moderation = not settings.openai_base_url
        self._provider_label = (
            "openai-compatible" if settings.openai_base_url else "openai"
        )

    # ------------------------------------------------------------------
    # ILLMProvider implementation
    # ------------------------------------------------------------------

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.3,
        max_tokens: int = 4000,
    ) -> str:
        """Generate a text completion via the OpenAI-compatible chat API."""
        try:
            response = await self._client.chat.completions.create(
                model=self._text_model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except openai.APITimeoutError as exc:
            raise LLMError(
                message=f"{self._provider_label} timed out after 25s",
                provider_name=self.get_provider_name(),
            ) from exc
        except openai.APIError as exc:
            raise LLMError(
                message=f"{self._provider_label} API error: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        message = response.choices[0].message
        refusal = getattr(message, "refusal", None)
        if refusal:
            logger.warning("openai_refusal", model=self._text_model, reason=refusal)
            raise ContentRefusedError(
                message=refusal,
                provider_name=self.get_provider_name(),
            )
        if message.content is None:
            raise LLMError(
                message=f"{self._provider_label} returned empty response",
                provider_name=self.get_provider_name(),
            )
        logger.info(
            "openai_completion",
            model=self._text_model,
            provider=self._provider_label,
            tokens=response.usage.total_tokens if response.usage else None,
        )
        return message.content

    async def moderate(self, text: str) -> bool:
        """Run *text* through OpenAI's moderation endpoint."""
        if not self._has_moderation:
            return False
        try:
            response = await self._client.moderations.create(input=text)
        except openai.APIError as exc:
            raise LLMError(
                message=f"{self._provider_label} moderation error: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        flagged = any(result.flagged for result in response.results)
        logger.info("openai_moderation", flagged=flagged)
        return flagged

    def is_available(self) -> bool:
        """Return ``True`` if an API key is configured (doesn't verify it works)."""
        return bool(self._api_key)

    async def validate_credentials(self) -> bool:
        """Try listing models to verify the API key works."""
        if not self.is_available():
            return False
        try:
            await self._client.models.list()
            return True
        except openai.APIError:
            return False

    def get_provider_name(self) -> str:
        """Return 'openai' or 'openai-compatible' depending on configuration."""
        return self._provider_label
