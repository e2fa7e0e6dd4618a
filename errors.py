class AnalyzerError(Exception):
    """Base class for errors raised by the analysis pipeline."""

    status_code = 500


class ValidationError(AnalyzerError):
    """Required request fields are missing or blank."""

    status_code = 400


class UpstreamSearchError(AnalyzerError):
    """The first search page could not be fetched."""

    status_code = 500


class NoResultsError(AnalyzerError):
    """The search succeeded but returned no videos."""

    status_code = 404

    def __init__(self, message: str = "No videos found for this channel"):
        super().__init__(message)


class ClassifierError(AnalyzerError):
    """A single batch could not be classified. Contained by the orchestrator."""


class UpstreamClassifierError(ClassifierError):
    """Transport, auth or rate-limit failure talking to the text-generation service."""


class ClassifierOutputError(ClassifierError):
    """The text-generation service answered, but not with a usable analysis."""
