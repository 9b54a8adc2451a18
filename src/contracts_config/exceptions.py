"""Custom exception hierarchy for contracts-config."""

from __future__ import annotations


class ContractsConfigError(Exception):
    """Base exception for all contracts-config errors.

    All custom exceptions in this module inherit from this base class so
    callers can catch resolution failures without swallowing unrelated ones.
    """

    def __init__(
        self,
        message: str,
        *,
        context: dict[str, object] | None = None,
    ) -> None:
        """Initialize the exception with a message and optional context.

        Args:
            message: The error message.
            context: Optional context dictionary with additional error information.
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return a string representation of the exception."""
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} (context: {context_str})"
        return self.message


class ConfigError(ContractsConfigError):
    """Base exception for configuration-related errors."""

    def __init__(
        self,
        message: str,
        *,
        config_file: str | None = None,
        config_section: str | None = None,
        config_key: str | None = None,
        context: dict[str, object] | None = None,
    ) -> None:
        """Initialize the configuration error with context.

        Args:
            message: The error message.
            config_file: The configuration file path.
            config_section: The configuration section (e.g., "networks").
            config_key: The configuration key.
            context: Optional additional context.
        """
        config_context: dict[str, object] = {}
        if config_file:
            config_context["config_file"] = config_file
        if config_section:
            config_context["config_section"] = config_section
        if config_key:
            config_context["config_key"] = config_key
        if context:
            config_context.update(context)

        super().__init__(message, context=config_context)
        self.config_file = config_file
        self.config_section = config_section
        self.config_key = config_key


class BaseFragmentError(ConfigError):
    """Raised when the static base fragment cannot be read or parsed."""

    pass


class MissingBaseFragmentError(BaseFragmentError):
    """Raised when the static base fragment does not exist.

    Resolution cannot continue without it, so this halts startup.
    """

    pass


class ValidationError(ConfigError):
    """Raised when a base fragment value has the wrong shape."""

    def __init__(
        self,
        message: str,
        *,
        value: object | None = None,
        expected_type: str | None = None,
        **kwargs: object,
    ) -> None:
        """Initialize the validation error.

        Args:
            message: The error message.
            value: The invalid value.
            expected_type: The expected type.
            **kwargs: Additional arguments passed to ConfigError.
        """
        context = kwargs.pop("context", {}) or {}
        if value is not None:
            context["value"] = value
        if expected_type:
            context["expected_type"] = expected_type
        kwargs["context"] = context
        super().__init__(message, **kwargs)
        self.value = value
        self.expected_type = expected_type


__all__ = [
    "BaseFragmentError",
    "ConfigError",
    "ContractsConfigError",
    "MissingBaseFragmentError",
    "ValidationError",
]
