"""Custom exception hierarchy for Tokoro.

All application exceptions inherit from :class:`TokoroError`, which carries
an optional ``provider_name`` so error handlers can identify which external
collaborator (e.g. "mongodb", "openai", "ollama") caused the failure.

    TokoroError  (base -- catch-all for any Tokoro error)
    +-- NotFoundError            (no record with the requested id)
    +-- InvalidInputError        (caller-supplied data rejected)
    +-- DocumentStoreError       (database round-trip failed)
    +-- LLMError                 (any LLM API call failure)
    |   +-- ContentRefusedError  (model declined to answer)
    +-- ProviderUnavailableError (external service down / unreachable)
    +-- ConfigurationError       (startup / missing config)

The API layer maps each subclass to an HTTP status in
``tokoro.api.middleware``; services never build HTTP responses themselves.
"""


class TokoroError(Exception):
    """Base exception for all Tokoro errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which external service triggered the
    error.  ``__str__`` prefixes the provider name in brackets for log
    output, e.g. ``[mongodb] connection refused``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Caller-facing errors
# ---------------------------------------------------------------------------

class NotFoundError(TokoroError):
    """Raised when get, update or delete targets an id that does not exist."""

    def __init__(self, resource: str, entity_id: str) -> None:
        self._resource = resource
        self._entity_id = entity_id
        super().__init__(message=f"{resource} not found: {entity_id}")

    @property
    def resource(self) -> str:
        return self._resource

    @property
    def entity_id(self) -> str:
        return self._entity_id


class InvalidInputError(TokoroError):
    """Raised when caller-supplied data is rejected by a service."""

    def __init__(
        self,
        message: str = "Invalid input",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# External service / provider errors
# ---------------------------------------------------------------------------

class DocumentStoreError(TokoroError):
    """Raised when a document store round-trip fails."""

    def __init__(
        self,
        message: str = "Document store operation failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class LLMError(TokoroError):
    """Raised when an LLM API call fails or returns an unparseable response."""

    def __init__(
        self,
        message: str = "LLM API call failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ContentRefusedError(LLMError):
    """Raised by a provider when the model explicitly declines a request.

    The tag service turns this into a :class:`~tokoro.models.tags.Refusal`
    value instead of letting it reach the client as a failure.
    """

    def __init__(
        self,
        message: str = "The model refused to answer",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ProviderUnavailableError(TokoroError):
    """Raised when an external service or provider is unreachable."""

    def __init__(
        self,
        message: str = "External service is unavailable",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ConfigurationError(TokoroError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
