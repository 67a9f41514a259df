# Structured log event names / response error codes
INVALID_JSON_BODY = 'INVALID_JSON_BODY'
MISSING_LONG_URL = 'MISSING_LONG_URL'
SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'
STORE_UNAVAILABLE = 'STORE_UNAVAILABLE'
