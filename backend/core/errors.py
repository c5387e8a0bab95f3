"""
JOBSCOUT • core/errors.py
Exception taxonomy for the analysis and cover-letter pipelines.
Messages are user-facing: routers forward str(exc) as the error body.
"""

from __future__ import annotations


class JobScoutError(Exception):
    """Base class for pipeline failures surfaced to the caller."""


class ExtractionError(JobScoutError):
    def __init__(self, message: str = "Failed to parse CV file.") -> None:
        super().__init__(message)


class MissingCredentialError(JobScoutError):
    pass


class SourceStartError(JobScoutError):
    """The listing provider refused to start a run; carries its raw error text."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Apify start failed: {detail}")


class SourceRequestError(JobScoutError):
    """A poll or dataset request was rejected; carries only status and body."""

    def __init__(self, what: str, status_code: int, detail: str) -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"Apify {what} request failed ({status_code}): {detail}")


class SourceRunFailedError(JobScoutError):
    """A provider run reached a terminal state other than SUCCEEDED."""

    def __init__(self, status: str) -> None:
        self.status = status
        super().__init__(f"Apify run failed with status: {status}")


class SourceTimeoutError(JobScoutError):
    pass


class ProfileParseError(JobScoutError):
    pass


class CoverLetterError(JobScoutError):
    def __init__(self, message: str = "Failed to generate cover letter.") -> None:
        super().__init__(message)
