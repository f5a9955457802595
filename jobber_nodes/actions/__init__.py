"""Per-resource operation families and the dispatch table over them."""
from typing import Dict, Union

from ..jobber_errors import UnsupportedOperation
from . import client, graphql, invoice, job, quote
from .base import Handler, Operation, OperationContext, OperationResult, Resource

HANDLERS_BY_RESOURCE: Dict[Resource, Dict[Operation, Handler]] = {
    Resource.CLIENT: client.HANDLERS,
    Resource.JOB: job.HANDLERS,
    Resource.QUOTE: quote.HANDLERS,
    Resource.INVOICE: invoice.HANDLERS,
    Resource.GRAPHQL: graphql.HANDLERS,
}


def resolve_handler(resource: Union[Resource, str], operation: Union[Operation, str]) -> Handler:
    """
    Maps a (resource, operation) pair to its handler.

    Raises:
        UnsupportedOperation: either key is unknown, or the resource lacks that operation.
    """
    try:
        resource_key = Resource(resource)
    except ValueError:
        raise UnsupportedOperation(f"Unknown resource: {resource}") from None
    try:
        operation_key = Operation(operation)
    except ValueError:
        raise UnsupportedOperation(f"Unknown operation: {operation}") from None

    handler = HANDLERS_BY_RESOURCE[resource_key].get(operation_key)
    if handler is None:
        raise UnsupportedOperation(f"Unknown operation: {operation_key.value} for resource {resource_key.value}")
    return handler


def execute_operation(
    resource: Union[Resource, str], operation: Union[Operation, str], context: OperationContext
) -> OperationResult:
    return resolve_handler(resource, operation)(context)


__all__ = [
    "HANDLERS_BY_RESOURCE",
    "Operation",
    "OperationContext",
    "OperationResult",
    "Resource",
    "execute_operation",
    "resolve_handler",
]
