"""Configuration management with environment variables."""

import os
from dotenv import load_dotenv

# Load .env file
load_dotenv()

# Logging configuration
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")

# HTTP API configuration
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))

# Badge counts above this are shown as "99+"
BADGE_MAX_COUNT = int(os.getenv("BADGE_MAX_COUNT", "99"))
