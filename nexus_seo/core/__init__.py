"""
Core utilities for Nexus SEO.
"""
from nexus_seo.core.exceptions import (
    NexusSEOError,
    ValidationError,
    MissingURLError,
    InvalidURLError,
    PageExtractionError,
    NavigationTimeoutError,
    FetchFailedError,
    ExtractionContractError,
    JobNotFoundError,
    InvalidJobTransitionError,
    AssemblerError,
    UpstreamUnavailableError,
    JobFailedError,
    AuditTimeoutError,
)

__all__ = [
    "NexusSEOError",
    "ValidationError",
    "MissingURLError",
    "InvalidURLError",
    "PageExtractionError",
    "NavigationTimeoutError",
    "FetchFailedError",
    "ExtractionContractError",
    "JobNotFoundError",
    "InvalidJobTransitionError",
    "AssemblerError",
    "UpstreamUnavailableError",
    "JobFailedError",
    "AuditTimeoutError",
]
