"""Logging utilities for the application."""

import logging
import sys

from constants import LOGGING_LEVEL

# Application logger shared by the store, the API and the client
logger = logging.getLogger("sheetcrud")

logger.setLevel(getattr(logging, LOGGING_LEVEL, logging.INFO))

# Process and thread IDs tell uvicorn workers apart
formatter = logging.Formatter("%(asctime)s - PID:%(process)d - Thread:%(thread)d - %(name)s - %(levelname)s - %(message)s")

console_handler = logging.StreamHandler(sys.stdout)
console_handler.setFormatter(formatter)
logger.addHandler(console_handler)

# Prevent propagation to root logger to avoid duplicate logs
logger.propagate = False
