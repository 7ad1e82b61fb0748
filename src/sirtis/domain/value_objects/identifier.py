"""Sequential case and call identifiers.

Case numbers look like ``CASE-2025-00000042`` and call numbers like
``00000042/2025``. The numeric part is zero-padded to eight digits so that,
within one year, ordering the strings descending yields the highest sequence.
Legacy call numbers were padded to seven digits; parsing accepts any width.
"""

import re
from dataclasses import dataclass

from sirtis.domain.exceptions import MalformedIdentifier, SequenceExhausted
from sirtis.domain.value_objects.entity_kind import EntityKind

SEQUENCE_WIDTH = 8
MAX_SEQUENCE = 10**SEQUENCE_WIDTH - 1

_CASE_RE = re.compile(r"CASE-(?P<year>\d{4})-(?P<seq>.*)")
_CALL_RE = re.compile(r"(?P<seq>[^/]*)/(?P<year>\d{4})")


@dataclass(frozen=True)
class SequenceScope:
    """(entity kind, year) pair within which sequence numbers are unique."""

    entity_kind: EntityKind
    year: int

    @property
    def like_pattern(self) -> str:
        """SQL LIKE pattern matching every identifier in this scope."""
        if self.entity_kind == EntityKind.CASE:
            return f"CASE-{self.year}-%"
        return f"%/{self.year}"

    def matches(self, identifier: str) -> bool:
        if self.entity_kind == EntityKind.CASE:
            return identifier.startswith(f"CASE-{self.year}-")
        return identifier.endswith(f"/{self.year}")

    @property
    def lock_key(self) -> str:
        return f"{self.entity_kind.value}:{self.year}"


@dataclass(frozen=True)
class AllocatedIdentifier:
    """One formatted identifier: scope plus positive sequence number."""

    scope: SequenceScope
    sequence: int

    def __post_init__(self) -> None:
        if self.sequence < 1:
            raise ValueError("Sequence numbers start at 1")
        if self.sequence > MAX_SEQUENCE:
            raise ValueError(
                f"Sequence for {self.scope.entity_kind} {self.scope.year} exhausted"
            )

    @property
    def value(self) -> str:
        seq = str(self.sequence).zfill(SEQUENCE_WIDTH)
        if self.scope.entity_kind == EntityKind.CASE:
            return f"CASE-{self.scope.year}-{seq}"
        return f"{seq}/{self.scope.year}"

    def next(self) -> "AllocatedIdentifier":
        if self.sequence >= MAX_SEQUENCE:
            raise SequenceExhausted(
                f"No {self.scope.entity_kind} numbers left for {self.scope.year}"
            )
        return AllocatedIdentifier(self.scope, self.sequence + 1)

    def __str__(self) -> str:
        return self.value

    @classmethod
    def first(cls, scope: SequenceScope) -> "AllocatedIdentifier":
        return cls(scope, 1)

    @classmethod
    def parse(cls, entity_kind: EntityKind, identifier: str) -> "AllocatedIdentifier":
        """Parse a stored identifier. Raises MalformedIdentifier."""
        pattern = _CASE_RE if entity_kind == EntityKind.CASE else _CALL_RE
        m = pattern.fullmatch(identifier.strip())
        if not m:
            raise MalformedIdentifier(identifier, f"not a {entity_kind} number")
        seq = m.group("seq")
        if not seq.isascii() or not seq.isdigit():
            raise MalformedIdentifier(identifier)
        try:
            return cls(SequenceScope(entity_kind, int(m.group("year"))), int(seq))
        except ValueError as e:
            raise MalformedIdentifier(identifier, str(e)) from e
