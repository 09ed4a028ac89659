# -*- coding: utf-8 -*-
"""
Core Constants
==============
Centralized configuration constants for the gtxtranslate core.
Endpoint details, request limits and cache lifetimes live here so the
translation modules stay free of magic numbers.
"""

# ============================================================================
# TRANSLATION API ENDPOINT
# ============================================================================

TRANSLATE_URL = "https://translate.google.com/translate_a/single"

# Page scraped for the TKK seed used by the tk token
TKK_SOURCE_URL = "https://translate.google.com"

CLIENT_ID = "gtx"

# Output sections requested from the endpoint (multi-valued `dt` parameter)
DT_FLAGS = ["at", "bd", "ex", "ld", "md", "qca", "rw", "rm", "ss", "t"]

# GET URLs longer than this switch to POST with the text in the body
MAX_GET_URL_LENGTH = 2048

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded;charset=UTF-8"

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

# ============================================================================
# DEFAULTS
# ============================================================================

DEFAULT_SOURCE_LANGUAGE = "auto"
DEFAULT_TARGET_LANGUAGE = "en"
DEFAULT_MAX_CHUNK_CHARS = 4500

# ============================================================================
# CACHE, TOKENS & TIMEOUTS
# ============================================================================

CACHE_TTL_SECONDS = 86400

# TKK seeds rotate hourly; the first half of the seed is the hour number
TKK_REFRESH_SECONDS = 3600
TKK_SEED = "0"

REQUEST_TIMEOUT_TOTAL = 45
REQUEST_TIMEOUT_CONNECT = 10
