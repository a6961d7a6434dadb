class UrlShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:url_shortener_error'


class ValidationError(UrlShortenerError, ValueError):
    """Raised when a URL record or request carries invalid data."""

    error_code = 'app:validation_error'


class ExpiredRecordError(UrlShortenerError):
    """Raised when a URL record's expiration time has passed."""

    error_code = 'app:expired_record_error'

    def __init__(self, message: str, record=None):
        super().__init__(message)
        self.record = record


class ConfigurationError(UrlShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError, KeyError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
