"""
General use constants.
"""

from __future__ import annotations
from typing import Final

import regex

DASH: Final[str] = "-"
IDENTIFIER: Final[regex.Pattern[str]] = regex.compile(r"\p{Alphabetic}[\p{Alphabetic}\-]*")
"""An alphabetic character followed by alphabetic characters or dashes. Uses the Unicode `Alphabetic` property, not just letters."""
