"""
Configuration module for the postal-code lookup service.

Defines constants for the geocoding endpoint, API credentials, HTTP
timeouts, user agent string and the user-facing messages.
"""

import os

# Google Geocoding API
GEOCODE_URL: str = os.getenv(
    "GEOCODE_URL", "https://maps.googleapis.com/maps/api/geocode/json"
)
GOOGLE_API_KEY: str = os.getenv("GOOGLE_API_KEY", "")

# HTTP configs
REQUEST_TIMEOUT: float = float(os.getenv("REQUEST_TIMEOUT", "20"))

# Messages shown by the form
INVALID_ZIPCODE: str = os.getenv("INVALID_ZIPCODE", "Invalid zipcode")
SELECT_COUNTRY: str = os.getenv("SELECT_COUNTRY", "Please select a country!")
ENTER_ZIPCODE: str = os.getenv("ENTER_ZIPCODE", "Please enter zipcode!")

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# UA
USER_AGENT: str = os.getenv(
    "USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",
)
