"""
Small parser combinator library.

A parser takes an input view and returns either a `Success` holding the remaining input and a value,
or a `Failure` holding the input it was given.

See the `combparse.general` module for ready-made leaf parsers you can use as examples.

Defining parsers:
```
@parser
def foo(view: StringView) -> ParseResult[str]:
    if view.startswith("abc"):
        rest = view.advance(3)
        return Success(rest, "abc")     # success
    return Failure(view)                # fail
```

Combining parsers:
```
tag_opener = right("<", identifier)     # strings are literal parsers
tag_opener.parse("<my-first-element/>") # <Success '/>' {'my-first-element'}>
```

Using parsers:
```
result = foo.parse("abcdef")
if result:
    rest, value = result    # `result` is a `Success` object
else:
    ...                     # `result` is a `Failure` object
```
"""

import combparse.const as const
import combparse.main
from combparse.main import (
    StringView,
    ParseError,
    Failure,
    Success,
    ParseResult,
    Parser,
    ParserFn,
    ParserLike,
    FnParser,
    parser,
    as_parser,
    match_literal,
    character,
    map,
    pair,
    left,
    right,
)
from combparse.element import Element
import combparse.general as general
from combparse.general import (
    identifier,
    the_letter_a,
)
