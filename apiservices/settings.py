import os

AUTH_URL = os.getenv("AUTH_URL", "https://example.com")
DEFAULT_TIMEOUT = float(os.getenv("DEFAULT_TIMEOUT", "30.0"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "console")
