from typing import Dict

from ..data_utilities import remove_empty_properties
from ..jobber_models import INVOICE_FIELDS, USER_ERROR_FIELDS
from .base import (
    Handler, Operation, OperationContext, OperationResult, deleted, ensure_writable,
    fetch_many, fetch_one, run_mutation,
)

GET_INVOICE = f"""
query GetInvoice($id: EncodedId!) {{
  invoice(id: $id) {{ {INVOICE_FIELDS} }}
}}
"""

GET_INVOICES = f"""
query GetInvoices($first: Int, $after: String, $searchTerm: String) {{
  invoices(first: $first, after: $after, searchTerm: $searchTerm) {{
    edges {{ node {{ {INVOICE_FIELDS} }} }}
    pageInfo {{ hasNextPage endCursor }}
  }}
}}
"""

CREATE_INVOICE = f"""
mutation CreateInvoice($input: InvoiceCreateInput!) {{
  invoiceCreate(input: $input) {{
    invoice {{ {INVOICE_FIELDS} }}
    {USER_ERROR_FIELDS}
  }}
}}
"""

UPDATE_INVOICE = f"""
mutation UpdateInvoice($invoiceId: EncodedId!, $input: InvoiceUpdateInput!) {{
  invoiceUpdate(invoiceId: $invoiceId, input: $input) {{
    invoice {{ {INVOICE_FIELDS} }}
    {USER_ERROR_FIELDS}
  }}
}}
"""

DELETE_INVOICE = f"""
mutation DeleteInvoice($invoiceId: EncodedId!) {{
  invoiceDelete(invoiceId: $invoiceId) {{
    invoice {{ id }}
    {USER_ERROR_FIELDS}
  }}
}}
"""


def get_invoice(context: OperationContext) -> OperationResult:
    return fetch_one(context, "invoice", GET_INVOICE, context.get_parameter("invoiceId"))


def get_invoices(context: OperationContext) -> OperationResult:
    return fetch_many(context, "invoices", GET_INVOICES)


def create_invoice(context: OperationContext) -> OperationResult:
    ensure_writable(context, Operation.CREATE)
    additional = context.get_collection("additionalFields")
    invoice_input = remove_empty_properties({
        "clientId": context.get_parameter("clientId"),
        "subject": additional.get("subject"),
        "message": additional.get("message"),
        "dueDate": additional.get("dueDate"),
        "jobId": additional.get("jobId"),
    })
    result = run_mutation(context, CREATE_INVOICE, {"input": invoice_input}, "invoiceCreate", "create invoice")
    return result.get("invoice") or {}


def update_invoice(context: OperationContext) -> OperationResult:
    ensure_writable(context, Operation.UPDATE)
    invoice_id = context.get_parameter("invoiceId")
    invoice_input = remove_empty_properties(context.get_collection("updateFields"))
    result = run_mutation(
        context, UPDATE_INVOICE, {"invoiceId": invoice_id, "input": invoice_input}, "invoiceUpdate", "update invoice"
    )
    return result.get("invoice") or {}


def delete_invoice(context: OperationContext) -> OperationResult:
    ensure_writable(context, Operation.DELETE)
    invoice_id = context.get_parameter("invoiceId")
    run_mutation(context, DELETE_INVOICE, {"invoiceId": invoice_id}, "invoiceDelete", "delete invoice")
    return deleted(invoice_id)


HANDLERS: Dict[Operation, Handler] = {
    Operation.GET: get_invoice,
    Operation.GET_MANY: get_invoices,
    Operation.CREATE: create_invoice,
    Operation.UPDATE: update_invoice,
    Operation.DELETE: delete_invoice,
}
