"""
Error kinds raised by the highlighting pipeline.

Per-block failures are turned into a fallback by the renderer and never reach
the caller of a document render. Only the standalone CSS export lets a
``FormatError`` through.
"""


class HighlightError(Exception):
    """Base class for every recoverable highlighting failure."""


class TokenizeError(HighlightError):
    """The lexer (or the lexer registry) could not process the input."""


class FormatError(HighlightError):
    """The formatter could not render a token stream or the style CSS."""
