# -*- coding: utf-8 -*-
"""
Language Table
==============
Language codes accepted by the translate endpoint and the helpers used to
validate and normalize caller-supplied identifiers. A language may be given
either by its code (``"fr"``, ``"zh-cn"``) or by its English name
(``"French"``); both resolve to the canonical code.
"""

from typing import Dict, List, Optional, Union

LANGUAGES: Dict[str, str] = {
    "auto": "Automatic",
    "af": "Afrikaans",
    "sq": "Albanian",
    "am": "Amharic",
    "ar": "Arabic",
    "hy": "Armenian",
    "az": "Azerbaijani",
    "eu": "Basque",
    "be": "Belarusian",
    "bn": "Bengali",
    "bs": "Bosnian",
    "bg": "Bulgarian",
    "ca": "Catalan",
    "ceb": "Cebuano",
    "ny": "Chichewa",
    "zh-CN": "Chinese (Simplified)",
    "zh-TW": "Chinese (Traditional)",
    "co": "Corsican",
    "hr": "Croatian",
    "cs": "Czech",
    "da": "Danish",
    "nl": "Dutch",
    "en": "English",
    "eo": "Esperanto",
    "et": "Estonian",
    "tl": "Filipino",
    "fi": "Finnish",
    "fr": "French",
    "fy": "Frisian",
    "gl": "Galician",
    "ka": "Georgian",
    "de": "German",
    "el": "Greek",
    "gu": "Gujarati",
    "ht": "Haitian Creole",
    "ha": "Hausa",
    "haw": "Hawaiian",
    "he": "Hebrew",
    "iw": "Hebrew",
    "hi": "Hindi",
    "hmn": "Hmong",
    "hu": "Hungarian",
    "is": "Icelandic",
    "ig": "Igbo",
    "id": "Indonesian",
    "ga": "Irish",
    "it": "Italian",
    "ja": "Japanese",
    "jw": "Javanese",
    "kn": "Kannada",
    "kk": "Kazakh",
    "km": "Khmer",
    "ko": "Korean",
    "ku": "Kurdish (Kurmanji)",
    "ky": "Kyrgyz",
    "lo": "Lao",
    "la": "Latin",
    "lv": "Latvian",
    "lt": "Lithuanian",
    "lb": "Luxembourgish",
    "mk": "Macedonian",
    "mg": "Malagasy",
    "ms": "Malay",
    "ml": "Malayalam",
    "mt": "Maltese",
    "mi": "Maori",
    "mr": "Marathi",
    "mn": "Mongolian",
    "my": "Myanmar (Burmese)",
    "ne": "Nepali",
    "no": "Norwegian",
    "ps": "Pashto",
    "fa": "Persian",
    "pl": "Polish",
    "pt": "Portuguese",
    "pa": "Punjabi",
    "ro": "Romanian",
    "ru": "Russian",
    "sm": "Samoan",
    "gd": "Scots Gaelic",
    "sr": "Serbian",
    "st": "Sesotho",
    "sn": "Shona",
    "sd": "Sindhi",
    "si": "Sinhala",
    "sk": "Slovak",
    "sl": "Slovenian",
    "so": "Somali",
    "es": "Spanish",
    "su": "Sundanese",
    "sw": "Swahili",
    "sv": "Swedish",
    "tg": "Tajik",
    "ta": "Tamil",
    "te": "Telugu",
    "th": "Thai",
    "tr": "Turkish",
    "uk": "Ukrainian",
    "ur": "Urdu",
    "uz": "Uzbek",
    "vi": "Vietnamese",
    "cy": "Welsh",
    "xh": "Xhosa",
    "yi": "Yiddish",
    "yo": "Yoruba",
    "zu": "Zulu",
}


class LanguageTable:
    """Case-insensitive lookup over a code -> English name mapping."""

    def __init__(self, languages: Optional[Dict[str, str]] = None):
        self._languages = dict(languages if languages is not None else LANGUAGES)
        self._by_code = {code.lower(): code for code in self._languages}
        # First code wins for names shared by several codes (he / iw)
        self._by_name: Dict[str, str] = {}
        for code, name in self._languages.items():
            self._by_name.setdefault(name.lower(), code)

    def get_iso_code(self, lang: Optional[str]) -> Union[str, None, bool]:
        """Return the canonical code for a code or language name.

        ``False`` for an empty value, ``None`` when nothing matches. Callers
        treat both as "not resolvable".
        """
        if not lang:
            return False
        key = str(lang).strip().lower()
        if key in self._by_code:
            return self._by_code[key]
        return self._by_name.get(key)

    def is_supported(self, lang: Optional[str]) -> bool:
        return bool(self.get_iso_code(lang))

    def get_name(self, lang: str) -> Optional[str]:
        code = self.get_iso_code(lang)
        if not code:
            return None
        return self._languages[code]

    def codes(self) -> List[str]:
        return list(self._languages.keys())

    def __contains__(self, lang: object) -> bool:
        return isinstance(lang, str) and self.is_supported(lang)

    def __len__(self) -> int:
        return len(self._languages)


_default_table: Optional[LanguageTable] = None


def get_language_table() -> LanguageTable:
    """Shared table built from LANGUAGES."""
    global _default_table
    if _default_table is None:
        _default_table = LanguageTable()
    return _default_table


def is_supported(lang: Optional[str]) -> bool:
    return get_language_table().is_supported(lang)


def get_iso_code(lang: Optional[str]) -> Union[str, None, bool]:
    return get_language_table().get_iso_code(lang)
