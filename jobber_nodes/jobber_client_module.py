# jobber_client_module.py
"""
Jobber API client for making GraphQL requests.
Builds the request envelope, attaches the bearer token from an injected resolver,
unwraps the {data, errors} response and walks Relay-style connections.
"""
import logging
import re
import requests
from typing import Any, Callable, Dict, List, Optional, cast

from .data_utilities import get_path
from .jobber_config import HTTP_TIMEOUT_SECONDS, JOBBER_API_VERSION, JOBBER_GRAPHQL_URL, MAX_PAGE_SIZE
from .jobber_errors import ApiError, MissingTokenError
from .jobber_models import GraphQLErrorDetail, GraphQLRequest, GraphQLResponseWrapper, PageInfoGQL

logger = logging.getLogger(__name__)

TokenResolver = Callable[[], Optional[str]]
GraphQLData = Dict[str, Any]

_OPERATION_NAME_RE = re.compile(r'(mutation|query)\s+(\w+)', re.IGNORECASE)


def describe_operation(request: GraphQLRequest) -> str:
    """Name used in log lines: explicit operationName, else the one in the query text."""
    if request.operation_name:
        return f"GraphQL {request.operation_name}"
    match = _OPERATION_NAME_RE.search(request.query)
    return f"GraphQL {match.group(2) if match else 'UnnamedOperation'}"


class JobberClient:
    def __init__(
        self,
        token_resolver: TokenResolver,
        session: Optional[requests.Session] = None,
        api_version: str = JOBBER_API_VERSION,
        timeout_seconds: int = HTTP_TIMEOUT_SECONDS,
    ):
        self._token_resolver = token_resolver
        self._session = session or requests.Session()
        self.api_version = api_version
        self.timeout_seconds = timeout_seconds

    def _get_headers(self) -> Dict[str, str]:
        """Resolves the current token and prepares headers. Token refresh is not our job."""
        token = self._token_resolver()
        if not token:
            raise MissingTokenError("Jobber API: No valid access token available. Please authorize the application.")
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "Authorization": f"Bearer {token}",
            "X-JOBBER-GRAPHQL-VERSION": self.api_version,
        }

    def send(self, request: GraphQLRequest) -> GraphQLData:
        """
        POSTs one GraphQL request and returns its `data` object ({} when absent).

        Raises:
            ApiError: GraphQL errors in the response (even alongside data), a non-2xx
                status, a network failure or a body that is not a JSON object.
        """
        headers = self._get_headers()
        log_query_identifier = describe_operation(request)
        logger.info("Sending %s. Variables: %s", log_query_identifier, sorted(request.variables))

        try:
            resp = self._session.post(
                JOBBER_GRAPHQL_URL, headers=headers, json=request.to_payload(), timeout=self.timeout_seconds
            )
            resp.raise_for_status()
        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            snippet = e.response.text[:200] if e.response is not None else ""
            logger.error("HTTPError for %s. Status: %s. Response: %s", log_query_identifier, status_code, snippet)
            raise ApiError(
                f"Failed to execute Jobber API request: {e}", cause=e, status_code=status_code
            ) from e
        except requests.exceptions.RequestException as e:
            logger.error("Request to Jobber API failed for %s (%s): %s", log_query_identifier, type(e).__name__, e)
            raise ApiError(f"Failed to execute Jobber API request: {e}", cause=e) from e

        try:
            body = resp.json()
        except ValueError as e:
            logger.error("Jobber API response for %s was not valid JSON. Snippet: %s", log_query_identifier, resp.text[:200])
            raise ApiError(
                f"Failed to execute Jobber API request: response was not valid JSON ({e})",
                cause=e,
                status_code=resp.status_code,
            ) from e
        if not isinstance(body, dict):
            raise ApiError(
                f"Failed to execute Jobber API request: expected a JSON object, got {type(body).__name__}",
                status_code=resp.status_code,
            )

        gql_response = cast(GraphQLResponseWrapper, body)
        errors_list = gql_response.get("errors")
        if errors_list:
            self._log_graphql_errors(log_query_identifier, errors_list)
            raise ApiError.from_graphql_errors(cast(List[Dict[str, Any]], errors_list))

        data = gql_response.get("data")
        if data is not None and not isinstance(data, dict):
            raise ApiError(
                f"Failed to execute Jobber API request: expected `data` to be a JSON object, got {type(data).__name__}",
                status_code=resp.status_code,
            )

        logger.info("%s completed successfully.", log_query_identifier)
        return data or {}

    @staticmethod
    def _log_graphql_errors(log_query_identifier: str, errors_list: List[GraphQLErrorDetail]) -> None:
        for i, err in enumerate(errors_list, start=1):
            code = (err.get("extensions") or {}).get("code")
            logger.error(
                "GraphQL error %d for %s: %s (path=%s, code=%s)",
                i, log_query_identifier, err.get("message", "Unknown GraphQL error"), err.get("path"), code,
            )

    def fetch_all(
        self, request: GraphQLRequest, data_path: str, limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """
        Collects `edges[].node` across every page of the connection found at `data_path`.

        Args:
            request: Query taking `$first` and `$after`.
            data_path: Dot-separated path from `data` to the connection, e.g. "clients".
            limit: Stop once this many nodes are collected. None fetches every page.

        Returns:
            The nodes in server order, truncated to `limit` when one is given.
        """
        if limit is not None and limit <= 0:
            return []

        results: List[Dict[str, Any]] = []
        cursor: Optional[str] = None

        while True:
            remaining = MAX_PAGE_SIZE if limit is None else limit - len(results)
            page_vars: Dict[str, Any] = {"first": min(MAX_PAGE_SIZE, remaining)}
            if cursor:
                page_vars["after"] = cursor
            page_request = request.with_variables(**page_vars)
            connection = get_path(self.send(page_request), data_path)
            if not isinstance(connection, dict):
                logger.info("No connection at '%s'; stopping after %d node(s).", data_path, len(results))
                break

            edges = connection.get("edges") or []
            results.extend(
                edge["node"] for edge in edges if isinstance(edge, dict) and edge.get("node") is not None
            )

            page_info = cast(PageInfoGQL, connection.get("pageInfo") or {})
            cursor = page_info.get("endCursor")
            if not page_info.get("hasNextPage") or not cursor:
                break
            if limit is not None and len(results) >= limit:
                break

        return results[:limit] if limit is not None else results
