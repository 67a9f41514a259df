class ShardShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:shardshortener_error'


class InvalidInputError(ShardShortenerError):
    """Raised when caller-supplied data fails a precondition (e.g. missing long URL)."""

    error_code = 'app:invalid_input_error'


class ConfigurationError(ShardShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
