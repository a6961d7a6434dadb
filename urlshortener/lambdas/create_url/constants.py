# Error codes / log events of the create_url Lambda
INVALID_JSON = 'INVALID_JSON'
MISSING_ORIGINAL_URL = 'MISSING_ORIGINAL_URL'
INVALID_ORIGINAL_URL = 'INVALID_ORIGINAL_URL'
MISSING_EXPIRATION_TIME = 'MISSING_EXPIRATION_TIME'
INVALID_EXPIRATION_TIME = 'INVALID_EXPIRATION_TIME'
SHORT_URL_ALREADY_EXISTS = 'SHORT_URL_ALREADY_EXISTS'
CONFIGURATION_ERROR = 'CONFIGURATION_ERROR'
DATA_STORE_ERROR = 'DATA_STORE_ERROR'
CREATE_SUCCESS = 'CREATE_SUCCESS'
