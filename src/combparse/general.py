"""
General purpose leaf parsers built on the core.
"""

from __future__ import annotations

import combparse.const as const
from combparse.main import (
    Failure,
    ParseResult,
    StringView,
    Success,
    character,
    parser,
)


@parser
def identifier(view: StringView) -> ParseResult[str]:
    """
    Matches a name: an alphabetic character followed by any amount of alphabetic characters or dashes.

    "Alphabetic" is the Unicode `Alphabetic` property, so letter numbers like `Ⅻ` and vowel signs like the `ि` in `हि` count too.

    Produces the matched string.

    ```
    identifier("not entirely")  # <Success ' entirely' {'not'}>
    identifier("!nope")         # <Failure '!nope'>
    ```
    """
    m = const.IDENTIFIER.match(view.src, view.pos)
    if m is None:
        return Failure(view)
    rest = view.advance(m.end() - view.pos)
    return Success(rest, rest.consumed_since(view))

the_letter_a = character("a")
"""Matches the single character `a`."""
