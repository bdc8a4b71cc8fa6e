"""Line and word tokenizers used by the text diff."""

from __future__ import annotations

import re

_INVISIBLE_ESCAPES = (
    ("\b", "\\b"),
    ("\f", "\\f"),
    ("\t", "\\t"),
    ("\v", "\\v"),
)
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")
_LINE_SPLIT_RE = re.compile(r"(\r\n|\r|\n)")

# ASCII word boundary, matching what ``\b`` means in most diff tooling.
_ASCII_BOUNDARY = r"(?<![A-Za-z0-9_])(?=[A-Za-z0-9_])|(?<=[A-Za-z0-9_])(?![A-Za-z0-9_])"
_WORD_SPLIT_RE = re.compile(r"([^\S\r\n]+|[()\[\]{}'\"\r\n]|" + _ASCII_BOUNDARY + r")")
# Letters, extended Latin included.
_WORD_CLASS_RE = re.compile(
    "[a-zA-Z\u00c0-\u00ff\u00d8-\u00f6\u00f8-\u02c6\u02c8-\u02d7\u02de-\u02ff\u1e00-\u1eff]+"
)


def escape_invisible(text: str) -> str:
    """Make control characters visible without losing line structure.

    Each line break gets a visible marker and is kept as a real break; a bare
    ``\\r`` is kept as a ``\\n`` break so it cannot rewind the terminal line.
    """
    for raw, visible in _INVISIBLE_ESCAPES:
        text = text.replace(raw, visible)
    return _LINE_BREAK_RE.sub(_escape_line_break, text)


def _escape_line_break(match: re.Match[str]) -> str:
    token = match.group(0)
    if token == "\r":
        return "\\r\n"
    if token == "\n":
        return "\\n\n"
    return "\\r\\n\r\n"


def tokenize_lines(text: str) -> list[str]:
    """Split into lines, each keeping its own terminator."""
    parts = _LINE_SPLIT_RE.split(text)
    # A final terminator leaves an empty trailing fragment.
    if not parts[-1]:
        parts.pop()

    tokens: list[str] = []
    for index, part in enumerate(parts):
        if index % 2:
            tokens[-1] += part
        else:
            tokens.append(part)
    return tokens


def tokenize_words(text: str) -> list[str]:
    """Split into words and separators, separators kept as their own tokens."""
    tokens = _WORD_SPLIT_RE.split(text)

    # Undo boundary splits between letters that fall outside ASCII word chars.
    index = 0
    while index < len(tokens) - 2:
        if (
            not tokens[index + 1]
            and tokens[index + 2]
            and _is_word_class(tokens[index])
            and _is_word_class(tokens[index + 2])
        ):
            tokens[index] += tokens[index + 2]
            del tokens[index + 1 : index + 3]
            continue
        index += 1

    return [token for token in tokens if token]


def _is_word_class(token: str) -> bool:
    return _WORD_CLASS_RE.fullmatch(token) is not None
