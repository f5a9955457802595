from typing import Dict

from ..data_utilities import remove_empty_properties
from ..jobber_models import JOB_FIELDS, QUOTE_FIELDS, USER_ERROR_FIELDS
from .base import (
    Handler, Operation, OperationContext, OperationResult, deleted, ensure_writable,
    fetch_many, fetch_one, run_mutation,
)

GET_QUOTE = f"""
query GetQuote($id: EncodedId!) {{
  quote(id: $id) {{ {QUOTE_FIELDS} }}
}}
"""

GET_QUOTES = f"""
query GetQuotes($first: Int, $after: String, $searchTerm: String) {{
  quotes(first: $first, after: $after, searchTerm: $searchTerm) {{
    edges {{ node {{ {QUOTE_FIELDS} }} }}
    pageInfo {{ hasNextPage endCursor }}
  }}
}}
"""

CREATE_QUOTE = f"""
mutation CreateQuote($input: QuoteCreateInput!) {{
  quoteCreate(input: $input) {{
    quote {{ {QUOTE_FIELDS} }}
    {USER_ERROR_FIELDS}
  }}
}}
"""

UPDATE_QUOTE = f"""
mutation UpdateQuote($quoteId: EncodedId!, $input: QuoteUpdateInput!) {{
  quoteUpdate(quoteId: $quoteId, input: $input) {{
    quote {{ {QUOTE_FIELDS} }}
    {USER_ERROR_FIELDS}
  }}
}}
"""

DELETE_QUOTE = f"""
mutation DeleteQuote($quoteId: EncodedId!) {{
  quoteDelete(quoteId: $quoteId) {{
    quote {{ id }}
    {USER_ERROR_FIELDS}
  }}
}}
"""

# Approved quotes only; Jobber answers with a userError otherwise.
CONVERT_QUOTE_TO_JOB = f"""
mutation ConvertQuoteToJob($quoteId: EncodedId!) {{
  quoteToJob(quoteId: $quoteId) {{
    job {{ {JOB_FIELDS} }}
    {USER_ERROR_FIELDS}
  }}
}}
"""


def get_quote(context: OperationContext) -> OperationResult:
    return fetch_one(context, "quote", GET_QUOTE, context.get_parameter("quoteId"))


def get_quotes(context: OperationContext) -> OperationResult:
    return fetch_many(context, "quotes", GET_QUOTES)


def create_quote(context: OperationContext) -> OperationResult:
    ensure_writable(context, Operation.CREATE)
    additional = context.get_collection("additionalFields")
    quote_input = remove_empty_properties({
        "clientId": context.get_parameter("clientId"),
        "title": context.get_parameter("title"),
        "message": additional.get("message"),
        "propertyId": additional.get("propertyId"),
    })
    result = run_mutation(context, CREATE_QUOTE, {"input": quote_input}, "quoteCreate", "create quote")
    return result.get("quote") or {}


def update_quote(context: OperationContext) -> OperationResult:
    ensure_writable(context, Operation.UPDATE)
    quote_id = context.get_parameter("quoteId")
    quote_input = remove_empty_properties(context.get_collection("updateFields"))
    result = run_mutation(
        context, UPDATE_QUOTE, {"quoteId": quote_id, "input": quote_input}, "quoteUpdate", "update quote"
    )
    return result.get("quote") or {}


def delete_quote(context: OperationContext) -> OperationResult:
    ensure_writable(context, Operation.DELETE)
    quote_id = context.get_parameter("quoteId")
    run_mutation(context, DELETE_QUOTE, {"quoteId": quote_id}, "quoteDelete", "delete quote")
    return deleted(quote_id)


def convert_quote_to_job(context: OperationContext) -> OperationResult:
    ensure_writable(context, Operation.CONVERT_TO_JOB)
    quote_id = context.get_parameter("quoteId")
    result = run_mutation(
        context, CONVERT_QUOTE_TO_JOB, {"quoteId": quote_id}, "quoteToJob", "convert quote to job"
    )
    return result.get("job") or {}


HANDLERS: Dict[Operation, Handler] = {
    Operation.GET: get_quote,
    Operation.GET_MANY: get_quotes,
    Operation.CREATE: create_quote,
    Operation.UPDATE: update_quote,
    Operation.DELETE: delete_quote,
    Operation.CONVERT_TO_JOB: convert_quote_to_job,
}
