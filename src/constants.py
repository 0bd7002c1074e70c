"""Constants for the application."""

import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Logging
LOGGING_LEVEL = os.environ.get("LOGGING_LEVEL", "INFO").upper()

# Storage settings
UPLOADS_DIR = os.environ.get("UPLOADS_DIR", "uploads")
DEFAULT_DATASET = os.environ.get("DEFAULT_DATASET", "certificate")
LOCK_TIMEOUT_SECONDS = float(os.environ.get("LOCK_TIMEOUT_SECONDS", "-1"))

# API settings
API_PREFIX = os.environ.get("API_PREFIX", "/api/v1")
