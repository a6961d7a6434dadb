# Error codes / log events of the redirect_url Lambda
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
SHORT_URL_EXPIRED = 'SHORT_URL_EXPIRED'
CONFIGURATION_ERROR = 'CONFIGURATION_ERROR'
DATA_STORE_ERROR = 'DATA_STORE_ERROR'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
