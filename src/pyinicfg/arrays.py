# -*- encoding: utf-8 -*-
# @File   : arrays.py
# @Time   : 2024/10/13 15:02:44
# @Author : Kariko Lin

"""Array literal grammar of setting values, i.e.

    ```ini
    Ints = { 1, 2, 3 }
    Strings = { first, "second, still second", {nested} }
    ```

A value is an array only if the *whole* trimmed text is one balanced
brace group. Anything else (`d {1,2} d`, `{13,}`) stays a plain string.
"""

from typing import Iterable

from .consts import ARRAY_BEGIN, ARRAY_END, ARRAY_SEPARATOR, QUOTE

__all__ = ['find_closing_brace', 'split_array', 'format_array']

# elements holding these would be split or cut if written bare.
_NEEDS_QUOTES = (ARRAY_SEPARATOR, ARRAY_BEGIN, ARRAY_END, '#', ';')


def find_closing_brace(text: str, start: int = 0) -> int:
    """Index of the brace closing `text[start]`, or -1 if unbalanced.

    Braces between double quotes do not count.
    """
    depth = 0
    quoted = False
    for i in range(start, len(text)):
        ch = text[i]
        if ch == QUOTE:
            quoted = not quoted
        elif quoted:
            continue
        elif ch == ARRAY_BEGIN:
            depth += 1
        elif ch == ARRAY_END:
            depth -= 1
            if depth == 0:
                return i
    return -1


def _unquote(element: str) -> str:
    # `"a""b"` is two quoted runs side by side, so only the outer quote
    # runs go away: `a""b`. `"""a b"""` ends up as `a b`.
    if len(element) > 1 and element[0] == QUOTE and element[-1] == QUOTE:
        return element.strip(QUOTE)
    return element


def split_array(text: str) -> list[str] | None:
    """Split an array literal into its element strings.

    Returns `None` if `text` is not array-shaped.
    Nested groups are kept verbatim: `{{1},{2}}` -> `['{1}', '{2}']`.
    """
    body = text.strip()
    if not body.startswith(ARRAY_BEGIN):
        return None
    if find_closing_brace(body) != len(body) - 1:
        return None

    inner = body[1:-1]
    if not inner.strip():
        return []

    pieces: list[str] = []
    depth, quoted, begin = 0, False, 0
    for i, ch in enumerate(inner):
        if ch == QUOTE:
            quoted = not quoted
        elif quoted:
            continue
        elif ch == ARRAY_BEGIN:
            depth += 1
        elif ch == ARRAY_END:
            depth -= 1
        elif ch == ARRAY_SEPARATOR and depth == 0:
            pieces.append(inner[begin:i])
            begin = i + 1
    if quoted or depth != 0:
        return None
    pieces.append(inner[begin:])

    ret = []
    for i in pieces:
        i = i.strip()
        if not i:  # `{,}`, `{13,}`
            return None
        ret.append(_unquote(i))
    return ret


def _quote_if_needed(element: str) -> str:
    if (
        not element
        or element != element.strip()
        or any(c in element for c in _NEEDS_QUOTES)
    ):
        return f'{QUOTE}{element}{QUOTE}'
    return element


def format_array(elements: Iterable[str]) -> str:
    """Inverse of `split_array()` for elements without double quotes."""
    return (ARRAY_BEGIN
            + ARRAY_SEPARATOR.join(_quote_if_needed(i) for i in elements)
            + ARRAY_END)
