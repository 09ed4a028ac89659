# -*- coding: utf-8 -*-
"""
Sensitive Data Masking and Logging Setup
========================================
Masks request tokens and API keys before log records are written.
"""

import logging
import re
from typing import Optional

# Patterns to mask
MASKS = [
    (re.compile(r'([?&]tk=)[0-9]+\.[0-9]+'), r'\1***MASKED***'),  # request token
    (re.compile(r'(AIza[0-9A-Za-z\-_]{30,})'), r'AIza***MASKED***'),  # Google API key
    (re.compile(r'(sk-[a-zA-Z0-9\-_]{20,})'), r'sk-***MASKED***'),  # Generic secret key
]


def mask(text: str) -> str:
    for pattern, replacement in MASKS:
        text = pattern.sub(replacement, text)
    return text


class SensitiveDataFilter(logging.Filter):
    """Masks sensitive values in log records."""

    def filter(self, record):
        if isinstance(record.msg, str):
            record.msg = mask(record.msg)
        if record.args and isinstance(record.args, tuple):
            record.args = tuple(mask(a) if isinstance(a, str) else a for a in record.args)
        return True


def setup_logger(name: str = "gtxtranslate", log_file: Optional[str] = None, level=logging.INFO):
    """Configure a logger with masking console (and optional file) handlers."""
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Clear existing handlers so repeated calls don't duplicate output
    if logger.handlers:
        logger.handlers = []

    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(formatter)
        file_handler.addFilter(SensitiveDataFilter())
        logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.addFilter(SensitiveDataFilter())
    logger.addHandler(console_handler)

    return logger
