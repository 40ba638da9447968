"""
Error taxonomy for the build creator.

Fatal errors carry a human-readable message plus an internal detail string; the
orchestrator turns them into {"error", "details"} records. Badge and name
resolution never raise: they degrade to empty or default output instead.
"""
from __future__ import annotations

from typing import Any


class BuildCreatorError(Exception):
    """Base class for request-fatal errors. Never retried inside the core."""

    message = "An error occurred during build creation"

    def __init__(self, details: str = "", message: str | None = None) -> None:
        if message is not None:
            self.message = message
        self.details = details
        super().__init__(f"{self.message}: {details}" if details else self.message)

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message, "details": self.details}


class InputError(BuildCreatorError):
    """Missing or empty prompt. Not retryable."""

    message = "Prompt is required"


class UpstreamDataError(BuildCreatorError):
    """A reference dataset could not be fetched or had an unexpected shape."""

    message = "Failed to load reference data"


class OracleError(BuildCreatorError):
    """The completion service is unreachable, unconfigured or returned nothing."""

    message = "The completion service request failed"


class OracleResponseError(OracleError):
    """The completion service answered with content that is not the expected JSON object."""

    message = "The completion service response could not be parsed"
