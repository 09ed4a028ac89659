# -*- coding: utf-8 -*-
"""Error type raised by the translation pipeline."""

from typing import Optional


class TranslateError(Exception):
    """A translation failure tagged with an HTTP-style status code.

    400 - invalid input (unsupported language, malformed warm-up arguments)
    502 - the upstream body could not be decoded as JSON
    503 - token generation or the transport call failed
    Any other code >= 400 is an upstream status surfaced verbatim.
    """

    def __init__(self, code: int, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return f"TranslateError(code={self.code!r}, message={self.message!r})"
