"""Caller-facing errors raised when an action or request is rejected.

Every error leaves engine state exactly as it was before the call. They derive
from ValueError so callers that only care about "bad input" can catch that.
"""

from __future__ import annotations


class PokerError(ValueError):
    """Base class for recoverable engine errors."""


class InsufficientChips(PokerError):
    pass


class InsufficientCards(PokerError):
    pass


class InvalidAction(PokerError):
    pass


class OutOfTurn(PokerError):
    pass


class InvalidRaiseAmount(PokerError):
    pass
