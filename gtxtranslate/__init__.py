"""
gtxtranslate
============
Cached asyncio client for the gtx translate endpoint.
"""

from gtxtranslate.core import languages
from gtxtranslate.core.errors import TranslateError
from gtxtranslate.core.models import TranslateOptions, TranslateResult
from gtxtranslate.core.translator import Translator, load_languages, translate
from gtxtranslate.version import VERSION

__version__ = VERSION

__all__ = [
    "Translator",
    "TranslateError",
    "TranslateOptions",
    "TranslateResult",
    "languages",
    "load_languages",
    "translate",
]
