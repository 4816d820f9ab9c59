"""
Domain exceptions for Nexus SEO.

Every error carries a human-readable message and the HTTP status code the API
answers with when the error reaches a request handler.
"""
from fastapi import status


class NexusSEOError(Exception):
    """Base class for all Nexus SEO errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# ---------------------------------------------------------------------------
# Input validation (never retried)
# ---------------------------------------------------------------------------

class ValidationError(NexusSEOError):
    """Caller supplied a missing or malformed URL."""

    status_code = status.HTTP_400_BAD_REQUEST


class MissingURLError(ValidationError):

    def __init__(self, message: str = "URL is required"):
        super().__init__(message)


class InvalidURLError(ValidationError):

    def __init__(self, url: str):
        super().__init__(f"Invalid URL format: {url!r}")
        self.url = url


# ---------------------------------------------------------------------------
# Page extraction (recorded on the job, never retried)
# ---------------------------------------------------------------------------

class PageExtractionError(NexusSEOError):
    """Base class for failures while loading or reading a page."""

    status_code = status.HTTP_502_BAD_GATEWAY


class NavigationTimeoutError(PageExtractionError):

    status_code = status.HTTP_504_GATEWAY_TIMEOUT

    def __init__(self, url: str, timeout_ms: int):
        super().__init__(f"Navigation timed out after {timeout_ms}ms: {url}")
        self.url = url
        self.timeout_ms = timeout_ms


class FetchFailedError(PageExtractionError):
    """Non-success response, null response or unreachable host."""

    def __init__(self, url: str, upstream_status: int | None = None, reason: str = ""):
        if upstream_status is not None:
            message = f"Failed to fetch page: HTTP {upstream_status}"
        else:
            message = "Failed to fetch page"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.url = url
        self.upstream_status = upstream_status
        if upstream_status is not None and upstream_status >= 400:
            self.status_code = upstream_status


class ExtractionContractError(PageExtractionError):
    """The extraction script returned a payload that does not match the contract."""

    def __init__(self, detail: str):
        super().__init__(f"Extraction output rejected: {detail}")


# ---------------------------------------------------------------------------
# Job engine
# ---------------------------------------------------------------------------

class JobNotFoundError(NexusSEOError):

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, job_id: str):
        super().__init__(f"Job not found: {job_id}")
        self.job_id = job_id


class InvalidJobTransitionError(NexusSEOError):

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, job_id: str, current: str, target: str):
        super().__init__(f"Job {job_id} cannot move from {current} to {target}")
        self.job_id = job_id


# ---------------------------------------------------------------------------
# Audit assembler (client side); converted to the simulated fallback
# ---------------------------------------------------------------------------

class AssemblerError(NexusSEOError):
    """Failure observed while driving the job API from the client side."""


class UpstreamUnavailableError(AssemblerError):
    """The job engine could not be reached or refused the submission."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class JobFailedError(AssemblerError):
    """The job reached FAILED; carries the error stored on the job."""


class AuditTimeoutError(AssemblerError):

    status_code = status.HTTP_504_GATEWAY_TIMEOUT

    def __init__(self, waited_seconds: float):
        super().__init__(f"Crawl timed out after {waited_seconds:g} seconds")
        self.waited_seconds = waited_seconds
