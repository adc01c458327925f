from __future__ import annotations


class RecommenderError(Exception):
    """Base class for failures surfaced to the user."""

    status_code = 500
    default_message = "Something went wrong. Please try again."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidExportFormatError(RecommenderError):
    status_code = 400
    default_message = "This is not a valid map data file: no list of places was found."


class NoUsablePlacesError(RecommenderError):
    status_code = 422
    default_message = "No place information was found in the file. Check its contents or try another file."


class VerificationError(RecommenderError):
    status_code = 422
    default_message = "The location could not be found. Please try again."


class ProfilingError(RecommenderError):
    status_code = 502
    default_message = "Failed to analyze your saved places. Please try again."


class MalformedResponseError(RecommenderError):
    status_code = 502
    default_message = "Failed to generate recommendations. Please try again."


class LLMUnavailableError(RecommenderError):
    status_code = 503
    default_message = "The recommendation service is not configured."


class SessionBusyError(RecommenderError):
    status_code = 409
    default_message = "A recommendation request is already in progress."


class ValidationError(RecommenderError):
    """Submission blocked by a missing or invalid form field."""

    status_code = 422

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field
