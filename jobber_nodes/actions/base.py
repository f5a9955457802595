"""
Pieces shared by every resource family: the operation/resource enums, the
explicit context handed to handlers, and the get/list/mutation plumbing.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Union, cast

from ..data_utilities import parse_flag, user_error_messages
from ..jobber_client_module import JobberClient
from ..jobber_errors import ApiError, DomainValidationError, InvalidInput, NotFoundError, ReadOnlyModeError
from ..jobber_models import GraphQLRequest, UserErrorGQL

DEFAULT_LIMIT = 50

_MISSING: Any = object()


class Resource(str, Enum):
    CLIENT = "client"
    JOB = "job"
    QUOTE = "quote"
    INVOICE = "invoice"
    GRAPHQL = "graphql"


class Operation(str, Enum):
    GET = "get"
    GET_MANY = "getMany"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    CONVERT_TO_JOB = "convertToJob"
    EXECUTE = "execute"
    EXECUTE_MUTATION = "executeMutation"


WRITE_OPERATIONS = frozenset({
    Operation.CREATE, Operation.UPDATE, Operation.DELETE,
    Operation.CONVERT_TO_JOB, Operation.EXECUTE_MUTATION,
})


@dataclass
class OperationContext:
    """Everything a handler needs for one input item."""
    client: JobberClient
    parameters: Mapping[str, Any]
    read_only: bool = False

    def get_parameter(self, name: str, default: Any = _MISSING) -> Any:
        value = self.parameters.get(name, _MISSING)
        if value is _MISSING:
            if default is _MISSING:
                raise InvalidInput(f"Missing required parameter: {name}")
            return default
        return value

    def get_collection(self, name: str) -> Dict[str, Any]:
        value = self.get_parameter(name, {}) or {}
        if not isinstance(value, Mapping):
            raise InvalidInput(f"Parameter '{name}' must be an object")
        return dict(value)


OperationResult = Union[Dict[str, Any], List[Dict[str, Any]]]
Handler = Callable[[OperationContext], OperationResult]


def ensure_writable(context: OperationContext, operation: Operation) -> None:
    if context.read_only and operation in WRITE_OPERATIONS:
        label = operation.value[:1].upper() + operation.value[1:]
        raise ReadOnlyModeError(f"{label} operation is disabled in read-only mode.")


def fetch_one(context: OperationContext, resource: str, query: str, record_id: str) -> Dict[str, Any]:
    response = context.client.send(GraphQLRequest(query=query, variables={"id": record_id}))
    node = response.get(resource)
    if node is None:
        raise NotFoundError(f"The {resource} with ID '{record_id}' could not be found")
    return node


def fetch_many(context: OperationContext, data_path: str, query: str) -> List[Dict[str, Any]]:
    """Runs a searchable connection query honouring returnAll/limit/filters.searchTerm."""
    return_all = parse_flag(context.get_parameter("returnAll", False))
    limit: Optional[int] = None
    if not return_all:
        try:
            limit = int(context.get_parameter("limit", DEFAULT_LIMIT))
        except (TypeError, ValueError) as e:
            raise InvalidInput("Parameter 'limit' must be an integer") from e
    filters = context.get_collection("filters")

    variables: Dict[str, Any] = {}
    if filters.get("searchTerm"):
        variables["searchTerm"] = filters["searchTerm"]

    return context.client.fetch_all(GraphQLRequest(query=query, variables=variables), data_path, limit)


def run_mutation(
    context: OperationContext,
    query: str,
    variables: Dict[str, Any],
    payload_key: str,
    action: str,
) -> Dict[str, Any]:
    """
    Sends a mutation and returns its payload object.

    Raises:
        ApiError: the payload under `payload_key` is not an object.
        DomainValidationError: the payload carries non-empty userErrors.
    """
    response = context.client.send(GraphQLRequest(query=query, variables=variables))
    result = response.get(payload_key) or {}
    if not isinstance(result, dict):
        raise ApiError(f"Failed to {action}: expected '{payload_key}' to be an object, got {type(result).__name__}")
    user_errors = cast(List[UserErrorGQL], result.get("userErrors") or [])
    if user_errors:
        raise DomainValidationError(
            f"Failed to {action}: {', '.join(user_error_messages(user_errors))}",
            user_errors=cast(List[Dict[str, Any]], user_errors),
        )
    return result


def deleted(record_id: str) -> Dict[str, Any]:
    return {"success": True, "deletedId": record_id}
