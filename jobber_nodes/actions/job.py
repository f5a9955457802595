from typing import Dict

from ..data_utilities import remove_empty_properties
from ..jobber_models import JOB_FIELDS, USER_ERROR_FIELDS
from .base import (
    Handler, Operation, OperationContext, OperationResult, deleted, ensure_writable,
    fetch_many, fetch_one, run_mutation,
)

GET_JOB = f"""
query GetJob($id: EncodedId!) {{
  job(id: $id) {{ {JOB_FIELDS} }}
}}
"""

GET_JOBS = f"""
query GetJobs($first: Int, $after: String, $searchTerm: String) {{
  jobs(first: $first, after: $after, searchTerm: $searchTerm) {{
    edges {{ node {{ {JOB_FIELDS} }} }}
    pageInfo {{ hasNextPage endCursor }}
  }}
}}
"""

CREATE_JOB = f"""
mutation CreateJob($input: JobCreateInput!) {{
  jobCreate(input: $input) {{
    job {{ {JOB_FIELDS} }}
    {USER_ERROR_FIELDS}
  }}
}}
"""

UPDATE_JOB = f"""
mutation UpdateJob($jobId: EncodedId!, $input: JobUpdateInput!) {{
  jobUpdate(jobId: $jobId, input: $input) {{
    job {{ {JOB_FIELDS} }}
    {USER_ERROR_FIELDS}
  }}
}}
"""

DELETE_JOB = f"""
mutation DeleteJob($jobId: EncodedId!) {{
  jobDelete(jobId: $jobId) {{
    job {{ id }}
    {USER_ERROR_FIELDS}
  }}
}}
"""


def get_job(context: OperationContext) -> OperationResult:
    return fetch_one(context, "job", GET_JOB, context.get_parameter("jobId"))


def get_jobs(context: OperationContext) -> OperationResult:
    return fetch_many(context, "jobs", GET_JOBS)


def create_job(context: OperationContext) -> OperationResult:
    ensure_writable(context, Operation.CREATE)
    additional = context.get_collection("additionalFields")
    job_input = remove_empty_properties({
        "clientId": context.get_parameter("clientId"),
        "title": context.get_parameter("title"),
        "instructions": additional.get("instructions"),
        "startAt": additional.get("startAt"),
        "endAt": additional.get("endAt"),
        "propertyId": additional.get("propertyId"),
    })
    result = run_mutation(context, CREATE_JOB, {"input": job_input}, "jobCreate", "create job")
    return result.get("job") or {}


def update_job(context: OperationContext) -> OperationResult:
    ensure_writable(context, Operation.UPDATE)
    job_id = context.get_parameter("jobId")
    job_input = remove_empty_properties(context.get_collection("updateFields"))
    result = run_mutation(context, UPDATE_JOB, {"jobId": job_id, "input": job_input}, "jobUpdate", "update job")
    return result.get("job") or {}


def delete_job(context: OperationContext) -> OperationResult:
    ensure_writable(context, Operation.DELETE)
    job_id = context.get_parameter("jobId")
    run_mutation(context, DELETE_JOB, {"jobId": job_id}, "jobDelete", "delete job")
    return deleted(job_id)


HANDLERS: Dict[Operation, Handler] = {
    Operation.GET: get_job,
    Operation.GET_MANY: get_jobs,
    Operation.CREATE: create_job,
    Operation.UPDATE: update_job,
    Operation.DELETE: delete_job,
}
