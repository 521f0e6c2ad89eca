"""
The tree node that markup grammars built on this package produce.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Element:
    """A named node with ordered `(name, value)` attributes and ordered children."""

    name: str
    attributes: list[tuple[str, str]] = field(default_factory=list)
    children: list[Element] = field(default_factory=list)
