# python/scenefile/textutil.py
# Line extraction, space trimming and delimiter splitting for scene text.
# Exists so the parser only ever sees trimmed, non-empty, non-comment lines.
# RELEVANT FILES:python/scenefile/parser.py,python/scenefile/scalars.py,tests/test_textutil.py

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

_LINE_BREAKS = frozenset("\r\n\0")
_END_OF_TEXT = "\0"


def trim(value: str) -> str:
    """Strip plain spaces (not tabs) from both ends.

    A string made only of spaces is returned unchanged.
    """
    stripped = value.strip(" ")
    if not stripped:
        return value
    return stripped


def split_fields(value: str, delimiter: str, keep_spaces: bool = False) -> List[str]:
    """Split ``value`` on every ``delimiter``, skipping empty segments.

    Each produced segment is trimmed unless ``keep_spaces`` is set. Consecutive
    delimiters collapse because zero-length segments are dropped before trimming.
    """
    out: List[str] = []
    for segment in value.split(delimiter):
        if not segment:
            continue
        out.append(segment if keep_spaces else trim(segment))
    return out


def split_key_value(line: str, keep_equals: bool = False) -> Optional[Tuple[str, str]]:
    """Return ``(key, value)`` for a ``key=value`` line, or None.

    By default only the first two ``=``-separated fields are used, so a value
    containing ``=`` is truncated at its first ``=``. With ``keep_equals`` the
    value is everything after the first ``=``.
    """
    if keep_equals:
        key, sep, value = line.partition("=")
        key = trim(key)
        value = trim(value)
        if not sep or not key or not value:
            return None
        return key, value

    parts = split_fields(line, "=")
    if len(parts) < 2:
        return None
    return parts[0], parts[1]


def is_comment(line: str) -> bool:
    """True for ``//`` comments and for a lone ``/``."""
    if not line.startswith("/"):
        return False
    return len(line) < 2 or line[1] == "/"


def iter_raw_lines(text: str) -> Iterator[str]:
    """Yield the non-empty runs of ``text`` between CR, LF or NUL characters.

    A NUL at the start of a line ends the text; a NUL inside a line only ends
    that line.
    """
    size = len(text)
    index = 0
    while index < size:
        if text[index] == _END_OF_TEXT:
            break
        end = index
        while end < size and text[end] not in _LINE_BREAKS:
            end += 1
        if end == index:
            index += 1
            continue
        yield text[index:end]
        index = end + 1


def iter_logical_lines(text: str) -> Iterator[str]:
    """Yield trimmed logical lines with comments removed."""
    for raw in iter_raw_lines(text):
        line = trim(raw)
        if is_comment(line):
            continue
        yield line
