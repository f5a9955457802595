from __future__ import annotations

import pytest

from jobber_nodes.actions import HANDLERS_BY_RESOURCE, Operation, OperationContext, Resource, execute_operation
from jobber_nodes.jobber_errors import DomainValidationError, InvalidInput, ReadOnlyModeError, UnsupportedOperation
from tests.conftest import connection_page


def _context(client, read_only: bool = False, **parameters) -> OperationContext:
    return OperationContext(client=client, parameters=parameters, read_only=read_only)


def test_every_record_resource_supports_crud() -> None:
    crud = {Operation.GET, Operation.GET_MANY, Operation.CREATE, Operation.UPDATE, Operation.DELETE}
    for resource in (Resource.CLIENT, Resource.JOB, Resource.QUOTE, Resource.INVOICE):
        assert crud <= set(HANDLERS_BY_RESOURCE[resource])
    assert Operation.CONVERT_TO_JOB in HANDLERS_BY_RESOURCE[Resource.QUOTE]


def test_create_job_input(client, session) -> None:
    session.queue({"data": {"jobCreate": {"job": {"id": "j1"}, "userErrors": []}}})

    result = execute_operation("job", "create", _context(
        client, clientId="c1", title="Gutter clean",
        additionalFields={"instructions": "", "startAt": "2025-05-01T09:00:00Z", "propertyId": None},
    ))

    assert result == {"id": "j1"}
    assert session.variables[0] == {
        "input": {"clientId": "c1", "title": "Gutter clean", "startAt": "2025-05-01T09:00:00Z"}
    }


def test_get_many_jobs_uses_default_limit(client, session) -> None:
    session.queue(connection_page("jobs", [{"id": "j1"}], False, "x"))

    assert execute_operation("job", "getMany", _context(client)) == [{"id": "j1"}]
    assert session.variables[0]["first"] == 50


def test_update_job_user_errors(client, session) -> None:
    session.queue({"data": {"jobUpdate": {"job": None, "userErrors": [{"message": "Title too long"}]}}})

    with pytest.raises(DomainValidationError, match="Failed to update job: Title too long"):
        execute_operation("job", "update", _context(client, jobId="j1", updateFields={"title": "x" * 300}))


def test_delete_invoice(client, session) -> None:
    session.queue({"data": {"invoiceDelete": {"invoice": {"id": "i1"}, "userErrors": []}}})

    assert execute_operation("invoice", "delete", _context(client, invoiceId="i1")) == {"success": True, "deletedId": "i1"}
    assert session.variables[0] == {"invoiceId": "i1"}


def test_create_invoice_input(client, session) -> None:
    session.queue({"data": {"invoiceCreate": {"invoice": {"id": "i1"}, "userErrors": []}}})

    execute_operation("invoice", "create", _context(
        client, clientId="c1", additionalFields={"subject": "April", "dueDate": "2025-05-01", "jobId": ""},
    ))

    assert session.variables[0] == {"input": {"clientId": "c1", "subject": "April", "dueDate": "2025-05-01"}}


def test_get_quote(client, session) -> None:
    session.queue({"data": {"quote": {"id": "q1", "quoteNumber": "12"}}})

    assert execute_operation("quote", "get", _context(client, quoteId="q1"))["quoteNumber"] == "12"


def test_convert_quote_to_job_returns_job(client, session) -> None:
    session.queue({"data": {"quoteToJob": {"job": {"id": "j9", "jobNumber": 9}, "userErrors": []}}})

    result = execute_operation("quote", "convertToJob", _context(client, quoteId="q1"))

    assert result == {"id": "j9", "jobNumber": 9}
    assert "quoteToJob" in session.calls[0]["json"]["query"]
    assert session.variables[0] == {"quoteId": "q1"}


def test_convert_quote_to_job_user_errors(client, session) -> None:
    session.queue({"data": {"quoteToJob": {"job": None, "userErrors": [{"message": "Quote is not approved"}]}}})

    with pytest.raises(DomainValidationError, match="Quote is not approved"):
        execute_operation("quote", "convertToJob", _context(client, quoteId="q1"))


@pytest.mark.parametrize("resource,operation,params", [
    ("client", "create", {"firstName": "Ada"}),
    ("job", "delete", {"jobId": "j1"}),
    ("quote", "convertToJob", {"quoteId": "q1"}),
    ("invoice", "update", {"invoiceId": "i1"}),
    ("graphql", "executeMutation", {"query": "mutation { x }"}),
])
def test_read_only_mode_blocks_writes_without_network(client, session, resource, operation, params) -> None:
    with pytest.raises(ReadOnlyModeError, match="disabled in read-only mode"):
        execute_operation(resource, operation, _context(client, read_only=True, **params))
    assert session.calls == []


def test_read_only_mode_allows_reads(client, session) -> None:
    session.queue({"data": {"invoice": {"id": "i1"}}})
    assert execute_operation("invoice", "get", _context(client, read_only=True, invoiceId="i1")) == {"id": "i1"}


def test_unknown_operation_is_named(client) -> None:
    with pytest.raises(UnsupportedOperation, match="archive"):
        execute_operation("client", "archive", _context(client))


def test_operation_not_offered_by_resource(client) -> None:
    with pytest.raises(UnsupportedOperation, match="convertToJob"):
        execute_operation("invoice", "convertToJob", _context(client))


def test_unknown_resource(client) -> None:
    with pytest.raises(UnsupportedOperation, match="Unknown resource: visit"):
        execute_operation("visit", "get", _context(client))


def test_missing_required_parameter(client, session) -> None:
    with pytest.raises(InvalidInput, match="jobId"):
        execute_operation("job", "get", _context(client))
    assert session.calls == []


def test_non_integer_limit(client) -> None:
    with pytest.raises(InvalidInput, match="limit"):
        execute_operation("quote", "getMany", _context(client, limit="lots"))


def test_return_all_string_false_honours_limit(client, session) -> None:
    session.queue(connection_page("jobs", [{"id": "j1"}, {"id": "j2"}], True, "c2"))

    result = execute_operation("job", "getMany", _context(client, returnAll="false", limit=2))

    assert result == [{"id": "j1"}, {"id": "j2"}]
    assert session.variables[0]["first"] == 2
    assert len(session.calls) == 1


def test_return_all_string_true_walks_pages(client, session) -> None:
    session.queue(
        connection_page("quotes", [{"id": "q1"}], True, "c1"),
        connection_page("quotes", [{"id": "q2"}], False, None),
    )

    result = execute_operation("quote", "getMany", _context(client, returnAll="true", limit=1))

    assert result == [{"id": "q1"}, {"id": "q2"}]
    assert session.variables[0]["first"] == 100
