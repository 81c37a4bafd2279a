"""
Custom exceptions for the classification guess stage.

Only two failure categories are ever raised to a caller:
- ConfigurationError at startup (the stage can never work)
- SerializationError while building a request (contained by the stage)

Transport failures and deadline expiry are never raised; the invoker
turns them into a NoAnswer outcome.
"""


class ClassificationGuessError(Exception):
    """
    Base exception for all classification guess errors.

    Carries a human readable message plus a details dict suitable for
    structured logging.
    """
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(ClassificationGuessError):
    """
    Raised when a required setting is missing or invalid.

    Examples:
    - Missing service URL
    - Empty header name
    - Non strictly positive thread count or timeout

    This is the only error allowed to stop processing.
    """
    pass


class SerializationError(ClassificationGuessError):
    """
    Raised when a message cannot be turned into a classification request.

    Covers truncated or structurally invalid MIME, undecodable text parts
    and messages that cannot be re-materialized from their source bytes.
    The stage skips the service call when this is raised.
    """
    pass
