class LLMError(RuntimeError):
    pass


class ConfigurationError(LLMError):
    """Raised at construction when the credential for the resolved provider is missing."""


class SchemaConversionError(LLMError):
    """Raised when a schema description cannot be converted for a provider."""


class RefusalError(LLMError):
    """Raised when the provider explicitly declined to produce structured content."""

    def __init__(self, refusal: str):
        super().__init__(refusal)
        self.refusal = refusal


class ResponseFormatError(LLMError):
    """Raised when a text response that should hold JSON cannot be parsed."""
