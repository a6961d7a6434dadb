from urlshortener.utils.config import app_env, app_name, project_root, app_prefix, load_config
from urlshortener.utils.helpers import base_url, get_short_url, require_environment, guarantee_500_response
from urlshortener.utils.shortener import generate_shortcode, random_shortcode
from urlshortener.utils.validation import validate_original_url, validate_expiration_time
from urlshortener.utils.logging import initialize_logging


__all__ = [
    'generate_shortcode',
    'random_shortcode',
    'app_env',
    'app_name',
    'app_prefix',
    'project_root',
    'load_config',
    'base_url',
    'get_short_url',
    'require_environment',
    'guarantee_500_response',
    'validate_original_url',
    'validate_expiration_time',
    'initialize_logging',
]
