"""Custom exceptions for the sentiment summarization pipeline."""

class SummarizationError(Exception):
    """Base class for summarization-specific errors."""
    pass

class ValidationError(SummarizationError, ValueError):
    """Raised when an argument is missing, not numeric or out of range."""
    pass

class EmptyInputError(SummarizationError):
    """Raised when tokenization produced no sentences."""
    pass

class DimensionError(SummarizationError):
    """Raised when the vector space is degenerate (e.g. zero terms)."""
    pass

class ExternalEngineError(SummarizationError):
    """Raised when a sentiment or embedding provider fails."""
    pass
