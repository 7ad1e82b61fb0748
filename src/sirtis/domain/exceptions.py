"""Domain exceptions."""


class SirtisError(Exception):
    """Base exception for SIRTIS."""

    pass


class Unauthenticated(SirtisError):
    """No valid session accompanies the request."""

    pass


class Forbidden(SirtisError):
    """Authenticated subject does not satisfy the operation's policy."""

    pass


class NotFound(SirtisError):
    """Requested resource was not found."""

    def __init__(self, entity: str, key: str = "") -> None:
        super().__init__(f"{entity} {key} not found" if key else f"{entity} not found")
        self.entity = entity
        self.key = key


class ValidationError(SirtisError):
    """Validation failed for input data."""

    pass


class StorageUnavailable(SirtisError):
    """Backing store could not be reached or failed mid-query."""

    pass


class MalformedIdentifier(SirtisError):
    """Stored identifier does not match its entity kind's format."""

    def __init__(self, identifier: str, reason: str = "non-numeric sequence") -> None:
        super().__init__(f"Malformed identifier {identifier!r}: {reason}")
        self.identifier = identifier
        self.reason = reason


class Conflict(SirtisError):
    """Write violated a uniqueness constraint."""

    pass


class SequenceExhausted(Conflict):
    """Every sequence number of a (kind, year) scope has been issued."""

    pass
