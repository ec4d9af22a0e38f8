"""LLM-based tag generation for free-text place searches.

Turns a prompt such as "quiet ramen place near Shibuya for a late dinner"
into a small set of localized tags (``ramen``, ``late-night``, ``quiet``…)
that can be matched against the tags stored on places.

Flow
----
1. **Moderation**: the provider's moderation check runs first.  A flagged
   prompt is refused with status 400 and never reaches the completion model.
2. **Completion**: the prompt is sent with a system prompt that describes
   the task, the required JSON shape, and one valid and one invalid example.
3. **Parsing**: the response must be ``{"tags": [{"lang", "name"}]}``.
   Markdown code fences around the JSON are tolerated.  The model may
   answer ``{"refusal": "<reason>"}`` for prompts that are not about places;
   that, or a provider-level refusal, becomes a :class:`Refusal` with status
   422.

Refusals are returned, not raised: the caller branches on
``isinstance(result, Refusal)``.  Transport or parsing failures raise
:class:`LLMError`.
"""

from __future__ import annotations

import json
import re
from typing import Any

from pydantic import ValidationError

from tokoro.interfaces.llm_provider import ILLMProvider
from tokoro.models.tags import Refusal, TagGenerationResult, TagSet
from tokoro.utils.errors import ContentRefusedError, InvalidInputError, LLMError
from tokoro.utils.logging import get_logger

_JSON_FENCE_RE = re.compile(r"```(?:json)?\s*\n?(.*?)\n?\s*```", re.DOTALL)

INAPPROPRIATE_CONTENT = "Message contains inappropriate content"

_DESCRIPTION = (
    "You generate search tags for a travel and places application. Given a "
    "user's free-text request, produce the tags that places matching the "
    "request would carry: cuisine, kind of place, atmosphere, activity, "
    "price level and notable features."
)

_OUTPUT_REQUIREMENTS = (
    "Answer with JSON only, no prose. Shape: "
    '{"tags": [{"lang": "<ISO 639-1 code>", "name": "<tag>"}]}. '
    "Produce between 1 and 10 tags. Tag names are lowercase, singular, and "
    "use hyphens instead of spaces. Use the language of the request for "
    '"lang". If the request is not about finding places or activities, '
    'answer {"refusal": "<short reason>"} instead.'
)

_VALID_EXAMPLE = (
    "Example request: \"cheap ramen near the station, open late\"\n"
    'Example answer: {"tags": [{"lang": "en", "name": "ramen"}, '
    '{"lang": "en", "name": "cheap"}, {"lang": "en", "name": "late-night"}]}'
)

_INVALID_EXAMPLE = (
    "Example request: \"write me a poem about my cat\"\n"
    'Example answer: {"refusal": "The request is not about places."}'
)

TAGS_SYSTEM_PROMPT = "\n\n".join(
    (_DESCRIPTION, _OUTPUT_REQUIREMENTS, _VALID_EXAMPLE, _INVALID_EXAMPLE)
)


class TagService:
    """Generates place tags from a prompt using an injected LLM provider.

    Parameters
    ----------
    llm:
        Provider used for moderation and completion.
    temperature:
        Default sampling temperature for tag generation.
    max_tokens:
        Completion token limit.
    """

    def __init__(
        self,
        llm: ILLMProvider,
        *,
        temperature: float = 1.0,
        max_tokens: int = 2000,
    ) -> None:
        self._llm = llm
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._logger = get_logger(__name__)

    @property
    def provider_name(self) -> str:
        return self._llm.get_provider_name()

    async def generate_tags(
        self,
        message: str,
        temperature: float | None = None,
    ) -> TagGenerationResult:
        """Generate tags for *message*.

        Parameters
        ----------
        message:
            Free-text prompt.
        temperature:
            Overrides the configured temperature for this call.

        Returns
        -------
        TagSet or Refusal
            The tags, or the reason the prompt was declined.

        Raises
        ------
        InvalidInputError
            If *message* is blank.
        LLMError
            If the provider fails or answers with something that is neither
            tags nor a refusal.
        """
        if not message or not message.strip():
            raise InvalidInputError("Message must not be blank")

        if await self._llm.moderate(message):
            self._logger.info("tags_prompt_flagged", provider=self.provider_name)
            return Refusal(reason=INAPPROPRIATE_CONTENT, status=400)

        try:
            raw = await self._llm.complete(
                system_prompt=TAGS_SYSTEM_PROMPT,
                user_prompt=message,
                temperature=self._temperature if temperature is None else temperature,
                max_tokens=self._max_tokens,
            )
        except ContentRefusedError as exc:
            self._logger.info("tags_refused_by_provider", provider=self.provider_name)
            return Refusal(reason=exc.message, status=422)

        result = self._parse(raw)
        if isinstance(result, Refusal):
            self._logger.info("tags_refused_by_model", reason=result.reason)
        else:
            self._logger.info("tags_generated", count=len(result.tags))
        return result

    # ── Private helpers ──────────────────────────────────────────────

    def _parse(self, raw: str) -> TagGenerationResult:
        payload = self._load_json(raw)
        refusal = payload.get("refusal")
        if refusal:
            return Refusal(reason=str(refusal), status=422)
        try:
            return TagSet.model_validate(payload)
        except ValidationError as exc:
            raise LLMError(
                message=f"Tag response did not match the expected shape: {exc.error_count()} error(s)",
                provider_name=self.provider_name,
            ) from exc

    def _load_json(self, raw: str) -> dict[str, Any]:
        text = raw.strip()
        fenced = _JSON_FENCE_RE.search(text)
        if fenced:
            text = fenced.group(1).strip()
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise LLMError(
                message="Tag response was not valid JSON",
                provider_name=self.provider_name,
            ) from exc
        if not isinstance(payload, dict):
            raise LLMError(
                message="Tag response was not a JSON object",
                provider_name=self.provider_name,
            )
        return payload
