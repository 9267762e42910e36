"""Custom exception hierarchy for credit-evolution."""


class CreditEvolutionError(Exception):
    """Base exception for all credit-evolution errors."""


class EntityNotFoundError(CreditEvolutionError):
    """Raised when a referenced entity does not exist."""


class ReferentialIntegrityError(EntityNotFoundError):
    """Raised when a settlement references a credit that is not stored."""


class InvalidEntityStateError(CreditEvolutionError):
    """Raised when an entity holds values no ledger can be built from."""


class MissingFieldError(CreditEvolutionError):
    """Raised when a field required to attempt a computation is absent."""


class ConfigurationError(CreditEvolutionError):
    """Raised when configuration is invalid or missing."""
