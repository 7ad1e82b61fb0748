"""Kinds of record that receive a sequential identifier."""

from enum import StrEnum


class EntityKind(StrEnum):
    """Entity kinds with their own per-year number sequence."""

    CASE = "case"
    CALL = "call"
