"""
Data models for the Jobber GraphQL API: request envelope, wire-level TypedDicts
and the field selections requested for each resource.
"""
from __future__ import annotations  # Allows forward references for type hints

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, TypedDict, Union

# ---------------------------------------------------------------------------
# GraphQL envelope
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GraphQLRequest:
    """A single GraphQL call. Never mutated; derive new requests with with_variables()."""
    query: str
    variables: Dict[str, Any] = field(default_factory=dict)
    operation_name: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"query": self.query, "variables": dict(self.variables)}
        if self.operation_name:
            payload["operationName"] = self.operation_name
        return payload

    def with_variables(self, **updates: Any) -> GraphQLRequest:
        merged = {**self.variables, **updates}
        return replace(self, variables=merged)


class GraphQLErrorLocation(TypedDict, total=False):
    line: int
    column: int


class GraphQLErrorDetail(TypedDict, total=False):
    message: str
    path: Optional[List[Union[str, int]]]
    locations: Optional[List[GraphQLErrorLocation]]
    extensions: Optional[Dict[str, Any]]


class GraphQLResponseWrapper(TypedDict, total=False):
    data: Optional[Dict[str, Any]]
    errors: Optional[List[GraphQLErrorDetail]]


class PageInfoGQL(TypedDict, total=False):
    hasNextPage: bool
    endCursor: Optional[str]


class UserErrorGQL(TypedDict, total=False):
    message: str
    path: List[Union[str, int]]


class WebhookEventPayload(TypedDict, total=False):
    """Body of an inbound Jobber webhook delivery. Extra event fields pass through untouched."""
    id: str
    topic: str
    data: Dict[str, Any]


# ---------------------------------------------------------------------------
# Field selections per resource
# ---------------------------------------------------------------------------

ADDRESS_FIELDS = "street1 street2 city province postalCode country"

CLIENT_FIELDS = f"""
    id
    name
    firstName
    lastName
    companyName
    isCompany
    title
    emails {{ address description primary }}
    phones {{ number description primary }}
    billingAddress {{ {ADDRESS_FIELDS} }}
    createdAt
    updatedAt
"""

JOB_FIELDS = f"""
    id
    jobNumber
    title
    instructions
    jobStatus
    startAt
    endAt
    total
    client {{ id name }}
    property {{ id address {{ {ADDRESS_FIELDS} }} }}
    createdAt
    updatedAt
"""

QUOTE_FIELDS = """
    id
    quoteNumber
    title
    message
    quoteStatus
    amounts { subtotal total }
    client { id name }
    property { id }
    transitionedAt
    createdAt
    updatedAt
"""

INVOICE_FIELDS = """
    id
    invoiceNumber
    subject
    message
    invoiceStatus
    dueDate
    amounts { subtotal total invoiceBalance }
    client { id name }
    createdAt
    updatedAt
"""

USER_ERROR_FIELDS = "userErrors { message path }"
