"""
Option loaders for dropdowns: the first page of clients, jobs and quotes as
{name, value} pairs.
"""
from typing import Any, Callable, Dict, List

from .jobber_client_module import JobberClient
from .jobber_config import MAX_PAGE_SIZE
from .jobber_models import GraphQLRequest

GET_CLIENTS_FOR_DROPDOWN = f"""
query GetClientsForDropdown {{
  clients(first: {MAX_PAGE_SIZE}) {{
    edges {{ node {{ id firstName lastName companyName isCompany }} }}
  }}
}}
"""

GET_JOBS_FOR_DROPDOWN = f"""
query GetJobsForDropdown {{
  jobs(first: {MAX_PAGE_SIZE}) {{
    edges {{ node {{ id title jobNumber }} }}
  }}
}}
"""

GET_QUOTES_FOR_DROPDOWN = f"""
query GetQuotesForDropdown {{
  quotes(first: {MAX_PAGE_SIZE}) {{
    edges {{ node {{ id title quoteNumber }} }}
  }}
}}
"""

OptionList = List[Dict[str, str]]


def _nodes(client: JobberClient, query: str, key: str) -> List[Dict[str, Any]]:
    data = client.send(GraphQLRequest(query=query))
    edges = (data.get(key) or {}).get("edges") or []
    return [edge["node"] for edge in edges if edge and edge.get("node")]


def client_display_name(node: Dict[str, Any]) -> str:
    person = f"{node.get('firstName') or ''} {node.get('lastName') or ''}".strip()
    company = node.get("companyName") or ""
    if node.get("isCompany"):
        return company or person
    return person or company


def get_clients(client: JobberClient) -> OptionList:
    return [
        {"name": client_display_name(node), "value": node["id"]}
        for node in _nodes(client, GET_CLIENTS_FOR_DROPDOWN, "clients")
    ]


def get_jobs(client: JobberClient) -> OptionList:
    return [
        {"name": f"#{node.get('jobNumber')} - {node.get('title') or 'Untitled'}", "value": node["id"]}
        for node in _nodes(client, GET_JOBS_FOR_DROPDOWN, "jobs")
    ]


def get_quotes(client: JobberClient) -> OptionList:
    return [
        {"name": f"#{node.get('quoteNumber')} - {node.get('title') or 'Untitled'}", "value": node["id"]}
        for node in _nodes(client, GET_QUOTES_FOR_DROPDOWN, "quotes")
    ]


OPTION_LOADERS: Dict[str, Callable[[JobberClient], OptionList]] = {
    "clients": get_clients,
    "jobs": get_jobs,
    "quotes": get_quotes,
}
