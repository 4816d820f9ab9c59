"""
In-memory records for Nexus SEO.
"""
from nexus_seo.models.job import Job, JobStatus

__all__ = [
    "Job",
    "JobStatus",
]
