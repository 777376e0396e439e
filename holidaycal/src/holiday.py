"""Resolved holiday record."""

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class Holiday:
    """A holiday pinned to a concrete date.

    regions holds the indices of the regions observing it; None means the
    whole country. Equality ignores regions.
    """

    identifier: str
    name: str
    date: date
    regions: frozenset[int] | None = field(default=None, compare=False)
