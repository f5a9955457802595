"""Jobber GraphQL operations, pagination and webhook trigger."""
from .jobber_client_module import JobberClient
from .jobber_errors import (
    ApiError, DomainValidationError, InvalidInput, JobberError, MissingTokenError, NotFoundError,
    ReadOnlyModeError, UnsupportedOperation,
)
from .jobber_models import GraphQLRequest
from .load_options import OPTION_LOADERS, get_clients, get_jobs, get_quotes
from .node import JobberNode
from .webhook import JobberWebhookHandler

__all__ = [
    "ApiError",
    "DomainValidationError",
    "GraphQLRequest",
    "InvalidInput",
    "JobberClient",
    "JobberError",
    "JobberNode",
    "JobberWebhookHandler",
    "MissingTokenError",
    "NotFoundError",
    "OPTION_LOADERS",
    "ReadOnlyModeError",
    "UnsupportedOperation",
    "get_clients",
    "get_jobs",
    "get_quotes",
]
