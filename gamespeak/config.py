"""
Configuration - Environment-driven settings for the compiler
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_MS = 150

# Packaged vocabulary and intent pattern files
PACKAGE_DATA_DIR = Path(__file__).parent / "data"


def get_debounce_ms() -> int:
    """Get the live preview debounce delay in milliseconds"""
    raw = os.getenv("GAMESPEAK_DEBOUNCE_MS")
    if not raw:
        return DEFAULT_DEBOUNCE_MS
    try:
        return int(raw)
    except ValueError:
        logger.warning(
            f"Ignoring GAMESPEAK_DEBOUNCE_MS={raw!r}, using {DEFAULT_DEBOUNCE_MS}ms"
        )
        return DEFAULT_DEBOUNCE_MS


def get_data_dir() -> Path:
    """Get the directory holding vocabulary.yaml and intent_patterns.yaml"""
    override = os.getenv("GAMESPEAK_DATA_DIR")
    if override:
        return Path(override)
    return PACKAGE_DATA_DIR
