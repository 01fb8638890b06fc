"""
Error taxonomy for the offering engine.

Every error aborts the operation that raised it; the ledger rolls back
all journaled effects before the exception reaches the caller.
"""


class OfferingError(Exception):
    """Base class for all engine errors."""


class PreconditionViolation(OfferingError):
    """Bad construction arguments."""


class Unauthorized(OfferingError):
    """Wrong caller for a restricted operation."""


class InsufficientPayment(OfferingError):
    """Paid value below the required price."""


class InsufficientSupply(OfferingError):
    """Not enough unsold tokens."""


class Overflow(OfferingError):
    """Arithmetic bound exceeded."""


class AlreadyChallenged(OfferingError):
    """Deposit release attempted on a challenged entry."""


class EmergencyHalt(OfferingError):
    """System-wide circuit breaker engaged."""


class NotWhitelisted(OfferingError):
    """Entry is not currently whitelisted."""


class AlreadySettled(OfferingError):
    """Deposit was already released."""


class AlreadyInitialized(OfferingError):
    """One-shot initializer called twice."""


class InsufficientBalance(OfferingError):
    """Sender does not hold enough of an asset."""
