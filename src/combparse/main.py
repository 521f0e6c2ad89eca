"""
The implementations of the main classes and combinators.
"""

from __future__ import annotations
from typing import Any, Callable, Final, Generic, Literal, Protocol, SupportsIndex, TypeVar, overload, runtime_checkable

from collections.abc import Iterator
import logging
import operator

logger = logging.getLogger(__name__)


_T = TypeVar("_T")
_A = TypeVar("_A")
_B = TypeVar("_B")
_R1 = TypeVar("_R1")
_R2 = TypeVar("_R2")
_DataCovT = TypeVar("_DataCovT", covariant=True)

PREVIEW_LENGTH: Final[int] = 40



class StringView:
    """
    An immutable window over a string, starting at `pos`.

    Advancing never copies the source string, it creates a new view over the same `src` object.

    ```
    view = StringView("Hello Joe!")
    rest = view.advance(6)
    rest == "Joe!"          # True
    rest.src is view.src    # True
    ```
    """
    def __init__(self, src: str, pos: int = 0) -> None:
        if not 0 <= pos <= len(src):
            raise ValueError(f"Position {pos} is outside of the string (length {len(src)}).")
        self.src: Final[str] = src
        """The whole string that's being parsed."""
        self.pos: Final[int] = pos
        """The position of the first unconsumed character."""

    @classmethod
    def of(cls, value: str | StringView) -> StringView:
        """Wraps a string at position 0. Views are returned as-is."""
        if isinstance(value, StringView):
            return value
        if isinstance(value, str):
            return cls(value)
        raise TypeError(f"Expected a str or a StringView, got {type(value).__name__}.")

    def __len__(self) -> int:
        """The amount of unconsumed characters."""
        return len(self.src) - self.pos

    def __bool__(self) -> bool:
        """Whether there are any characters left."""
        return self.pos < len(self.src)

    def __str__(self) -> str:
        return self.src[self.pos:]

    def __getitem__(self, key: SupportsIndex | slice) -> str:
        """Indexes relative to the start of the view."""
        if isinstance(key, slice):
            return str(self)[key]
        index = operator.index(key)
        if index < 0:
            index += len(self)
        if not 0 <= index < len(self):
            raise IndexError("StringView index out of range")
        return self.src[self.pos + index]

    def has_chars(self, amount: int) -> bool:
        """Whether there are at least that many characters left."""
        return self.pos+amount <= len(self.src)

    def peek(self, amount: int) -> str | None:
        """
        Retrieves the specified amount of characters.

        If there aren't enough characters, returns `None`.
        """
        if not self.has_chars(amount):
            return None
        return self.src[self.pos:self.pos+amount]

    def startswith(self, prefix: str) -> bool:
        """Whether the unconsumed text starts with `prefix`. Doesn't copy the text."""
        return self.src.startswith(prefix, self.pos)

    def advance(self, amount: int) -> StringView:
        """Returns a view that starts `amount` characters later."""
        if amount < 0 or not self.has_chars(amount):
            raise ValueError(f"Cannot advance by {amount}, only {len(self)} characters left.")
        if amount == 0:
            return self
        return StringView(self.src, self.pos + amount)

    def consumed_since(self, earlier: StringView) -> str:
        """
        Returns the characters between an earlier view and this one.

        Both views must be over the same string.
        """
        if not self.is_suffix_of(earlier):
            raise ValueError("The given view doesn't precede this one.")
        return self.src[earlier.pos:self.pos]

    def is_suffix_of(self, other: StringView) -> bool:
        """Whether this view is over the same string as `other` and doesn't start before it."""
        return self.src is other.src and self.pos >= other.pos

    def __eq__(self, other: object) -> bool:
        if isinstance(other, StringView):
            return len(self) == len(other) and str(self) == str(other)
        elif isinstance(other, str):
            return len(self) == len(other) and self.startswith(other)
        else:
            return NotImplemented

    def __hash__(self) -> int:
        return hash(str(self))

    def __repr__(self) -> str:
        return f"<StringView {self.pos}..{len(self.src)} {_preview(self)!r}>"


def _preview(view: StringView) -> str:
    if len(view) <= PREVIEW_LENGTH:
        return str(view)
    return view.src[view.pos:view.pos+PREVIEW_LENGTH] + "..."



class ParseError(Exception):
    """
    The exception that's raised when a caller escalates a `Failure`.

    Only carries the input that couldn't be parsed.
    """

    def __init__(self, remaining: StringView) -> None:
        if remaining:
            super().__init__(f"Could not parse input: {_preview(remaining)!r}")
        else:
            super().__init__("Could not parse input: unexpected end of input")
        self.remaining: StringView = remaining

class Failure:
    """
    When returned from a parser, indicates that it has failed.

    `remaining` is the exact view the failing parser was given, so the caller can try something else from the same spot.

    ```
    r = parser.parse("...")
    if r:
        ... # `r` is a `Success` object
    else:
        ... # `r` is a `Failure` object
    ```
    """

    def __init__(self, remaining: StringView) -> None:
        self.remaining: Final[StringView] = remaining

    def error(self) -> ParseError:
        """Converts this to a ParseError."""
        logger.debug("Escalating parse failure at position %d", self.remaining.pos)
        return ParseError(self.remaining)

    def unwrap(self) -> Any:
        """Always raises the `ParseError` version of this failure."""
        raise self.error()

    def __bool__(self) -> Literal[False]:
        return False

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Failure):
            return self.remaining == other.remaining
        return NotImplemented

    def __hash__(self) -> int:
        return hash(("Failure", self.remaining))

    def __repr__(self) -> str:
        return f"<Failure {_preview(self.remaining)!r}>"

class Success(Generic[_DataCovT]):
    """
    When returned from a parser, indicates that it has succeeded.

    ```
    r = parser.parse("...")
    if r:
        rest, value = r
    ```

    When used for typing: `Success[DataType]`
    """
    def __init__(self, remaining: StringView, value: _DataCovT) -> None:
        self.remaining: Final[StringView] = remaining
        """The input right after the matched part."""
        self.value: Final[_DataCovT] = value

    def unwrap(self) -> _DataCovT:
        return self.value

    def __iter__(self) -> Iterator[Any]:
        yield self.remaining
        yield self.value

    def __bool__(self) -> Literal[True]:
        return True

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Success):
            return self.remaining == other.remaining and self.value == other.value
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.remaining, self.value))

    def __repr__(self) -> str:
        return f"<Success {_preview(self.remaining)!r} {{{self.value!r}}}>"

ParseResult = Success[_T] | Failure



@runtime_checkable
class Parser(Protocol[_DataCovT]):
    """
    The parser contract.

    Anything with a `parse()` method that takes an input and returns a `ParseResult` is a parser.

    Parsers must be deterministic and free of side effects.
    """
    def parse(self, src: str | StringView) -> ParseResult[_DataCovT]: ...

class ParserFn(Protocol[_DataCovT]):
    """
    A protocol for plain parser functions.

    Can be lifted into a `Parser` with `FnParser` or `as_parser()`.
    """
    def __call__(self, view: StringView, /) -> ParseResult[_DataCovT]: ...

ParserLike = Parser[_T] | ParserFn[_T] | str

class FnParser(Generic[_DataCovT]):
    """
    Lifts a parser function into a `Parser`.

    Still callable like the function it wraps:
    ```
    p = FnParser(fn)
    p.parse("abc") == p("abc")
    ```
    """
    def __init__(self, fn: ParserFn[_DataCovT], name: str | None = None) -> None:
        self.fn: Final[ParserFn[_DataCovT]] = fn
        self.name: Final[str] = name if name is not None else getattr(fn, "__name__", type(fn).__name__)

    def parse(self, src: str | StringView) -> ParseResult[_DataCovT]:
        return self.fn(StringView.of(src))

    def __call__(self, src: str | StringView) -> ParseResult[_DataCovT]:
        """Same as `FnParser.parse()`."""
        return self.fn(StringView.of(src))

    def __repr__(self) -> str:
        return f"<FnParser {self.name}>"

def parser(fn: ParserFn[_T]) -> FnParser[_T]:
    """
    Decorator form of `FnParser`.

    ```
    @parser
    def foo(view: StringView) -> ParseResult[int]:
        ...
    ```
    """
    return FnParser(fn)

@overload
def as_parser(value: str) -> Parser[None]: ...
@overload
def as_parser(value: Parser[_T] | ParserFn[_T]) -> Parser[_T]: ...

def as_parser(value: ParserLike[Any]) -> Parser[Any]:
    """
    Converts anything parser-like into a `Parser`.

    - Objects with a callable `parse` method are returned as-is. The contract is structural, so this is
      taken on trust: the method must take an input and return a `ParseResult`.
    - Strings become `match_literal(value)`.
    - Other callables are wrapped with `FnParser`.
    """
    if callable(getattr(value, "parse", None)):
        return value  # type: ignore[return-value]
    elif isinstance(value, str):
        logger.debug("Converting string %r into a literal parser", value)
        return match_literal(value)
    elif callable(value):
        logger.debug("Lifting %r into a parser", value)
        return FnParser(value)
    else:
        raise TypeError(f"Expected a parser, a parser function or a string, got {type(value).__name__}.")



def match_literal(expected: str) -> Parser[None]:
    """
    Parser factory.

    Matches the given string exactly. Case sensitive. Produces `None`.

    An empty string always matches without consuming anything.
    """
    if not isinstance(expected, str):
        raise TypeError(f"Expected a str literal, got {type(expected).__name__}.")
    def inner(view: StringView) -> ParseResult[None]:
        if view.startswith(expected):
            return Success(view.advance(len(expected)), None)
        return Failure(view)
    return FnParser(inner, f"match_literal({expected!r})")

def character(expected: str) -> Parser[None]:
    """
    Parser factory.

    Matches a single character. Case sensitive. Produces `None`.
    """
    if not isinstance(expected, str):
        raise TypeError(f"Expected a str character, got {type(expected).__name__}.")
    if len(expected) != 1:
        raise ValueError(f"Expected exactly one character, got {len(expected)}.")
    def inner(view: StringView) -> ParseResult[None]:
        if view.peek(1) == expected:
            return Success(view.advance(1), None)
        return Failure(view)
    return FnParser(inner, f"character({expected!r})")



def map(parser: ParserLike[_A], transform: Callable[[_A], _B]) -> Parser[_B]:
    """
    Combinator.

    Applies `transform` to the value of a successful parse. The remaining input isn't touched.

    Failures are returned unchanged, and `transform` isn't called.
    """
    p = as_parser(parser)
    def inner(view: StringView) -> ParseResult[_B]:
        r = p.parse(view)
        if not r:
            return r
        return Success(r.remaining, transform(r.value))
    return FnParser(inner, f"map({p!r})")

def pair(parser1: ParserLike[_R1], parser2: ParserLike[_R2]) -> Parser[tuple[_R1, _R2]]:
    """
    Combinator.

    Runs `parser1`, then runs `parser2` on whatever `parser1` left. Produces both values as a tuple.

    If either parser fails, its own failure is returned. There is no backtracking: a failure of `parser2` points at where `parser2` started.
    """
    p1 = as_parser(parser1)
    p2 = as_parser(parser2)
    def inner(view: StringView) -> ParseResult[tuple[_R1, _R2]]:
        r1 = p1.parse(view)
        if not r1:
            return r1
        r2 = p2.parse(r1.remaining)
        if not r2:
            return r2
        return Success(r2.remaining, (r1.value, r2.value))
    return FnParser(inner, f"pair({p1!r}, {p2!r})")

def left(parser1: ParserLike[_R1], parser2: ParserLike[_R2]) -> Parser[_R1]:
    """
    Combinator.

    Same as `pair()`, but only keeps the value of `parser1`.
    """
    return map(pair(parser1, parser2), _first)

def right(parser1: ParserLike[_R1], parser2: ParserLike[_R2]) -> Parser[_R2]:
    """
    Combinator.

    Same as `pair()`, but only keeps the value of `parser2`.
    """
    return map(pair(parser1, parser2), _second)

def _first(values: tuple[_R1, _R2]) -> _R1:
    return values[0]

def _second(values: tuple[_R1, _R2]) -> _R2:
    return values[1]
