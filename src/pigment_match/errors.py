from __future__ import annotations


class PigmentMatchError(Exception):
    """Base class for every error raised by pigment_match."""


class InvalidInputError(PigmentMatchError, ValueError):
    pass


class InvalidColorError(InvalidInputError):
    pass


class UnknownPigmentError(PigmentMatchError, LookupError):
    """A pigment id is not part of the active catalog.

    Strokes are validated against the catalog before they reach a session,
    so seeing this from ``GameSession.mix`` means catalog and session have
    drifted apart.
    """

    def __init__(self, pigment_id: str) -> None:
        super().__init__(f"pigment not found: {pigment_id!r}")
        self.pigment_id = pigment_id


class SessionStateError(PigmentMatchError, RuntimeError):
    pass


__all__ = [
    "PigmentMatchError",
    "InvalidInputError",
    "InvalidColorError",
    "UnknownPigmentError",
    "SessionStateError",
]
