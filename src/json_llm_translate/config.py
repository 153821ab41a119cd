"""Runtime settings, read from the environment or a .env file."""

from __future__ import annotations

import os

from dotenv import find_dotenv, load_dotenv

# Load environment variables from .env file in current working directory
load_dotenv(find_dotenv(usecwd=True))

# Model configuration - can be overridden via environment variables or .env file
TRANSLATION_MODEL = os.environ.get("OPENAI_TRANSLATION_MODEL", "gpt-4o-mini")
# Low temperature keeps the returned JSON structure stable
TRANSLATION_TEMPERATURE = float(os.environ.get("TRANSLATION_TEMPERATURE", "0.3"))

# Retry configuration
MAX_RETRIES = int(os.environ.get("MAX_RETRIES", "3"))
INITIAL_RETRY_DELAY = float(os.environ.get("INITIAL_RETRY_DELAY", "1.0"))

# How many times a failing chunk may be split in half before giving up
MAX_FALLBACK_DEPTH = int(os.environ.get("MAX_FALLBACK_DEPTH", "3"))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
