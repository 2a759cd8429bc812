"""Custom exceptions for BottleneckIQ.

Exception hierarchy:
- BottleneckIQError (base)
  - ConfigurationError: LLM provider or API key unusable
  - ValidationError: A duration, column set or filter value is invalid
  - ExtractionError: Observation data could not be read
  - EnrichmentError: The LLM produced no usable insight text

Every exception carries a ``user_message`` that the CLI prints as-is.
"""


class BottleneckIQError(Exception):
    """Base exception for all BottleneckIQ errors."""

    def __init__(self, message: str, user_message: str | None = None) -> None:
        """
        Args:
            message: Technical detail for logs.
            user_message: Text safe to show an operator; defaults to message.
        """
        super().__init__(message)
        self.user_message = user_message or message


class ConfigurationError(BottleneckIQError):
    """The configured LLM provider cannot be used.

    Example: OPENROUTER_API_KEY unset, provider name misspelled.
    """

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message, user_message)
        self.config_key = config_key


class ValidationError(BottleneckIQError):
    """Input data failed a domain check.

    Example: negative duration, CSV without an actual_duration column,
    unknown time window.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: str | None = None,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message, user_message)
        self.field = field
        self.value = value


class ExtractionError(BottleneckIQError):
    """Observation data could not be read.

    Example: file missing, CSV empty or undecodable.
    """

    def __init__(
        self,
        message: str,
        source: str | None = None,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message, user_message)
        self.source = source


class EnrichmentError(BottleneckIQError):
    """The LLM returned no usable insight message.

    Caught by the insight generator, which falls back to the rule-based text.
    """

    def __init__(
        self,
        message: str,
        process_name: str | None = None,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message, user_message)
        self.process_name = process_name
