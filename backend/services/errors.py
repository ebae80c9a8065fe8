"""Service-layer exceptions for the fit engine."""


class FitEngineError(Exception):
    """Base exception for fit engine errors."""


class InvalidInput(FitEngineError, ValueError):
    """Raised when a caller passes blank markup or malformed text batches."""


class EmbeddingUnavailable(FitEngineError, RuntimeError):
    """Raised when the embedding model cannot be loaded or inference fails."""
