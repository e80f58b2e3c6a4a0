"""
Lexer selection and the tokenize/format pipeline for a single code block.

Nothing here writes to the output sink: the formatted block is buffered and
handed back in a ``HighlightResult`` so a failed block leaves no partial output.
"""

import logging
from dataclasses import dataclass
from io import StringIO
from typing import List, Optional, Tuple

from pygments.formatter import Formatter
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name, get_lexer_for_filename, guess_lexer
from pygments.lexers.special import TextLexer
from pygments.util import ClassNotFound

from mdpygments.errors import FormatError, HighlightError, TokenizeError

logger = logging.getLogger("mdpygments.highlight")


@dataclass(frozen=True)
class HighlightResult:
    """Either the formatted block (``output``) or the reason it failed (``error``)."""
    output: str = ""
    error: Optional[HighlightError] = None
    lexer: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def language_of(info: str) -> str:
    """First word of a fence info string, e.g. ``"python {linenos}"`` -> ``"python"``."""
    parts = info.split(maxsplit=1)
    return parts[0] if parts else ""


def lookup_lexer(name: str) -> Optional[Lexer]:
    """Exact registry lookup by alias, then by filename pattern."""
    try:
        return get_lexer_by_name(name)
    except ClassNotFound:
        pass
    try:
        return get_lexer_for_filename(name)
    except ClassNotFound:
        return None


def analyse_lexer(text: str) -> Optional[Lexer]:
    """Best-scoring lexer for ``text``, or None when nothing is confident."""
    try:
        return guess_lexer(text)
    except ClassNotFound:
        return None


def select_lexer(text: str, info: str = "", autodetect: bool = True) -> Lexer:
    """
    Pick the lexer for a code block.

    Precedence:
        1. The language named by the info string, if registered.
        2. Content analysis, if autodetection is enabled.
        3. The plain-text lexer, which never fails.
    """
    lexer = None
    language = language_of(info)
    if language:
        lexer = lookup_lexer(language)
    if lexer is None and autodetect:
        lexer = analyse_lexer(text)
    if lexer is None:
        lexer = TextLexer()
    logger.debug(f"Lexer for info={info!r}: {lexer.name}")
    return lexer


def tokenize(lexer: Lexer, text: str) -> List[Tuple]:
    try:
        return list(lexer.get_tokens(text))
    except Exception as e:
        raise TokenizeError(f"{lexer.name} lexer failed: {type(e).__name__}: {e}") from e


def format_tokens(formatter: Formatter, tokens: List[Tuple]) -> str:
    buf = StringIO()
    try:
        formatter.format(tokens, buf)
    except Exception as e:
        raise FormatError(f"Formatting failed: {type(e).__name__}: {e}") from e
    return buf.getvalue()


def write_css(formatter: Formatter) -> str:
    """
    CSS rules of the formatter's style, scoped to its wrapper class and
    including the style background. Raises FormatError.
    """
    try:
        return formatter.get_style_defs(f".{formatter.cssclass}")
    except Exception as e:
        raise FormatError(f"CSS export failed: {type(e).__name__}: {e}") from e


def highlight_block(
    text: str,
    formatter: Formatter,
    info: str = "",
    autodetect: bool = True,
) -> HighlightResult:
    """
    Highlight one code block.

    Args:
        text: Literal source of the block
        formatter: Shared formatter, already configured with the style
        info: Info string from the opening fence (may be empty)
        autodetect: Whether to analyse content when the info string gives no lexer

    Returns:
        HighlightResult with the formatted HTML, or with the error that
        prevented it
    """
    try:
        try:
            lexer = select_lexer(text, info, autodetect)
        except Exception as e:
            raise TokenizeError(f"Lexer lookup failed for {info!r}: {type(e).__name__}: {e}") from e
        output = format_tokens(formatter, tokenize(lexer, text))
    except HighlightError as e:
        return HighlightResult(error=e)
    return HighlightResult(output=output, lexer=lexer.name)
