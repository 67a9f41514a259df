# Structured log event names / response error codes
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
STORE_UNAVAILABLE = 'STORE_UNAVAILABLE'
