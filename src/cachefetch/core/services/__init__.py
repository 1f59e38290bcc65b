"""Domain services for cachefetch."""

from cachefetch.core.services.fetch_client import ResilientFetchClient
from cachefetch.core.services.resource_service import ResourceService
from cachefetch.core.services.retry_policy import RetryPolicy

__all__ = [
    "ResilientFetchClient",
    "ResourceService",
    "RetryPolicy",
]
