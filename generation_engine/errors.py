"""Error taxonomy for the hot-topic idea pipeline."""
from __future__ import annotations


class IdeaEngineError(Exception):
    """Base class for every fatal pipeline error."""


class ConfigurationError(IdeaEngineError):
    """A required credential or setting is missing or invalid."""


class FetchError(IdeaEngineError):
    """The trending-topic source returned an error or a malformed body."""


class ExtractionFailure(IdeaEngineError):
    """No usable idea list could be obtained from the generative-text service."""

    def __init__(self, message: str, attempts: int = 1):
        super().__init__(message)
        self.attempts = attempts


class WriteError(IdeaEngineError):
    """The HTML report could not be written."""
