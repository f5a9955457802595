from typing import Any, Dict

from ..data_utilities import remove_empty_properties
from ..jobber_models import CLIENT_FIELDS, USER_ERROR_FIELDS
from .base import (
    Handler, Operation, OperationContext, OperationResult, deleted, ensure_writable,
    fetch_many, fetch_one, run_mutation,
)

GET_CLIENT = f"""
query GetClient($id: EncodedId!) {{
  client(id: $id) {{ {CLIENT_FIELDS} }}
}}
"""

GET_CLIENTS = f"""
query GetClients($first: Int, $after: String, $searchTerm: String) {{
  clients(first: $first, after: $after, searchTerm: $searchTerm) {{
    edges {{ node {{ {CLIENT_FIELDS} }} }}
    pageInfo {{ hasNextPage endCursor }}
  }}
}}
"""

CREATE_CLIENT = f"""
mutation CreateClient($input: ClientCreateInput!) {{
  clientCreate(input: $input) {{
    client {{ {CLIENT_FIELDS} }}
    {USER_ERROR_FIELDS}
  }}
}}
"""

UPDATE_CLIENT = f"""
mutation UpdateClient($clientId: EncodedId!, $input: ClientUpdateInput!) {{
  clientUpdate(clientId: $clientId, input: $input) {{
    client {{ {CLIENT_FIELDS} }}
    {USER_ERROR_FIELDS}
  }}
}}
"""

DELETE_CLIENT = f"""
mutation DeleteClient($clientId: EncodedId!) {{
  clientDelete(clientId: $clientId) {{
    client {{ id }}
    {USER_ERROR_FIELDS}
  }}
}}
"""


def build_client_create_input(context: OperationContext) -> Dict[str, Any]:
    additional = context.get_collection("additionalFields")
    client_input = remove_empty_properties({
        "firstName": context.get_parameter("firstName", None),
        "lastName": context.get_parameter("lastName", None),
        "companyName": context.get_parameter("companyName", None),
        "title": additional.get("title"),
        "isCompany": additional.get("isCompany"),
    })
    if additional.get("email"):
        client_input["emails"] = [{"description": "MAIN", "address": additional["email"]}]
    if additional.get("phone"):
        client_input["phones"] = [{"description": "MAIN", "number": additional["phone"]}]
    return client_input


def get_client(context: OperationContext) -> OperationResult:
    return fetch_one(context, "client", GET_CLIENT, context.get_parameter("clientId"))


def get_clients(context: OperationContext) -> OperationResult:
    return fetch_many(context, "clients", GET_CLIENTS)


def create_client(context: OperationContext) -> OperationResult:
    ensure_writable(context, Operation.CREATE)
    result = run_mutation(
        context, CREATE_CLIENT, {"input": build_client_create_input(context)}, "clientCreate", "create client"
    )
    return result.get("client") or {}


def update_client(context: OperationContext) -> OperationResult:
    ensure_writable(context, Operation.UPDATE)
    client_id = context.get_parameter("clientId")
    client_input = remove_empty_properties(context.get_collection("updateFields"))
    result = run_mutation(
        context, UPDATE_CLIENT, {"clientId": client_id, "input": client_input}, "clientUpdate", "update client"
    )
    return result.get("client") or {}


def delete_client(context: OperationContext) -> OperationResult:
    ensure_writable(context, Operation.DELETE)
    client_id = context.get_parameter("clientId")
    run_mutation(context, DELETE_CLIENT, {"clientId": client_id}, "clientDelete", "delete client")
    return deleted(client_id)


HANDLERS: Dict[Operation, Handler] = {
    Operation.GET: get_client,
    Operation.GET_MANY: get_clients,
    Operation.CREATE: create_client,
    Operation.UPDATE: update_client,
    Operation.DELETE: delete_client,
}
