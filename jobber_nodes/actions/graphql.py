"""Raw GraphQL passthrough: run caller-supplied query or mutation text as-is."""
from typing import Dict

from ..data_utilities import parse_json_object
from ..jobber_errors import InvalidInput
from ..jobber_models import GraphQLRequest
from .base import Handler, Operation, OperationContext, OperationResult, ensure_writable


def _build_request(context: OperationContext) -> GraphQLRequest:
    query = context.get_parameter("query")
    if not isinstance(query, str) or not query.strip():
        raise InvalidInput("Query must be a non-empty string")
    variables = parse_json_object(context.get_parameter("variables", "{}"), "Variables")
    operation_name = context.get_parameter("operationName", "") or None
    return GraphQLRequest(query=query, variables=variables, operation_name=operation_name)


def execute_query(context: OperationContext) -> OperationResult:
    return context.client.send(_build_request(context))


def execute_mutation(context: OperationContext) -> OperationResult:
    ensure_writable(context, Operation.EXECUTE_MUTATION)
    request = _build_request(context)
    if not request.query.strip().lower().startswith("mutation"):
        raise InvalidInput("Only GraphQL mutations are accepted here; use the execute operation for queries.")
    return context.client.send(request)


HANDLERS: Dict[Operation, Handler] = {
    Operation.EXECUTE: execute_query,
    Operation.EXECUTE_MUTATION: execute_mutation,
}
