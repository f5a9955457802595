from __future__ import annotations

import pytest

from jobber_nodes.jobber_client_module import JobberClient
from jobber_nodes.jobber_errors import DomainValidationError, InvalidInput, UnsupportedOperation
from jobber_nodes.node import JobberNode
from tests.conftest import FakeSession, connection_page


def test_results_in_input_order_with_lists_flattened(client, session) -> None:
    session.queue(
        {"data": {"job": {"id": "j1"}}},
        connection_page("invoices", [{"id": "i1"}, {"id": "i2"}], False, "x"),
    )

    output = JobberNode(client).execute([
        {"resource": "job", "operation": "get", "jobId": "j1"},
        {"resource": "invoice", "operation": "getMany", "limit": 10},
    ])

    assert output == [{"id": "j1"}, {"id": "i1"}, {"id": "i2"}]


def test_failure_stops_batch_by_default(client, session) -> None:
    session.queue({"data": {"clientCreate": {"client": None, "userErrors": [{"message": "Email invalid"}]}}})

    with pytest.raises(DomainValidationError, match="Email invalid"):
        JobberNode(client).execute([
            {"resource": "client", "operation": "create", "firstName": "Ada"},
            {"resource": "client", "operation": "get", "clientId": "c1"},
        ])
    assert len(session.calls) == 1


def test_continue_on_fail_records_error_and_goes_on(client, session) -> None:
    session.queue(
        {"data": {"client": None}},
        {"data": {"client": {"id": "c2"}}},
    )

    output = JobberNode(client, continue_on_fail=True).execute([
        {"resource": "client", "operation": "get", "clientId": "c1"},
        {"resource": "client", "operation": "teleport"},
        {"resource": "client", "operation": "get", "clientId": "c2"},
    ])

    assert len(output) == 3
    assert "c1" in output[0]["error"]
    assert "teleport" in output[1]["error"]
    assert output[2] == {"id": "c2"}


def test_missing_resource_key(client) -> None:
    with pytest.raises(InvalidInput, match="Missing required parameter: resource"):
        JobberNode(client).execute([{"operation": "get"}])


def test_read_only_node(client, session) -> None:
    output = JobberNode(client, continue_on_fail=True, read_only=True).execute([
        {"resource": "job", "operation": "delete", "jobId": "j1"},
    ])

    assert output == [{"error": "Delete operation is disabled in read-only mode."}]
    assert session.calls == []


def test_unknown_operation_raises(client) -> None:
    with pytest.raises(UnsupportedOperation):
        JobberNode(client).execute([{"resource": "quote", "operation": "archive"}])


def test_continue_on_fail_captures_malformed_mutation_payload(client, session) -> None:
    session.queue(
        {"data": {"clientCreate": "oops"}},
        {"data": {"client": {"id": "c2"}}},
    )

    output = JobberNode(client, continue_on_fail=True).execute([
        {"resource": "client", "operation": "create", "firstName": "Ada"},
        {"resource": "client", "operation": "get", "clientId": "c2"},
    ])

    assert "clientCreate" in output[0]["error"]
    assert output[1] == {"id": "c2"}


def _flaky_client(session: FakeSession) -> JobberClient:
    calls = {"n": 0}

    def resolve_token() -> str:
        calls["n"] += 1
        if calls["n"] == 1:
            raise ValueError("could not convert string to float: 'soon'")
        return "test-token"

    return JobberClient(token_resolver=resolve_token, session=session)  # type: ignore[arg-type]


def test_continue_on_fail_captures_unexpected_exceptions() -> None:
    session = FakeSession([{"data": {"job": {"id": "j2"}}}])

    output = JobberNode(_flaky_client(session), continue_on_fail=True).execute([
        {"resource": "job", "operation": "get", "jobId": "j1"},
        {"resource": "job", "operation": "get", "jobId": "j2"},
    ])

    assert output == [{"error": "could not convert string to float: 'soon'"}, {"id": "j2"}]


def test_unexpected_exceptions_propagate_without_continue_on_fail() -> None:
    session = FakeSession([{"data": {"job": {"id": "j2"}}}])

    with pytest.raises(ValueError, match="soon"):
        JobberNode(_flaky_client(session)).execute([
            {"resource": "job", "operation": "get", "jobId": "j1"},
            {"resource": "job", "operation": "get", "jobId": "j2"},
        ])
    assert session.calls == []
