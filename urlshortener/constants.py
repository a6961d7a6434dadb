from enum import StrEnum


class TTL:
    """TTL durations in seconds."""

    # Storage retention after a record expires, so redirects can still answer 410 (1 month in seconds)
    RETENTION_GRACE = 2_592_000  # 60 * 60 * 24 * 30


class Shortcode:
    """Shortcode generation parameters."""

    LENGTH = 7  # Counter-based (base62 permutation) shortcode length
    RANDOM_LENGTH = 8  # Random shortcode length for backends without an atomic counter
    DEFAULT_SALT = 'default_salt'
    MAX_ATTEMPTS = 3  # Insert attempts before giving up on shortcode collisions


# Longest original URL accepted by the create path
MAX_URL_LENGTH = 2048

# Latest expiration time a record can carry: 9999-12-31T23:59:59Z, the last second a datetime can hold
MAX_EXPIRATION_TIME = 253_402_300_799


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        PROJECT_ROOT = 'PROJECT_ROOT'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'
        AGENT_URL = 'APPCONFIG_AGENT_URL'
        PROFILE_NAME = 'APPCONFIG_PROFILE_NAME'

    class LocalStack(StrEnum):
        ENDPOINT = 'LOCALSTACK_ENDPOINT'  # usually http://localstack:4566


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
