"""
Batch execution of resource operations over a list of input items.
"""
import logging
from typing import Any, Dict, List, Mapping, Sequence

from .actions import OperationContext, execute_operation
from .jobber_client_module import JobberClient
from .jobber_errors import JobberError

logger = logging.getLogger(__name__)


class JobberNode:
    """
    Runs one operation per input item, sequentially.

    Each item is a parameter mapping carrying `resource`, `operation` and the
    operation's own parameters. With `continue_on_fail`, a failing item yields
    {"error": message} and the batch goes on; otherwise the error propagates.
    """

    def __init__(self, client: JobberClient, continue_on_fail: bool = False, read_only: bool = False):
        self.client = client
        self.continue_on_fail = continue_on_fail
        self.read_only = read_only

    def execute(self, items: Sequence[Mapping[str, Any]]) -> List[Dict[str, Any]]:
        output: List[Dict[str, Any]] = []
        for index, item in enumerate(items):
            try:
                context = OperationContext(client=self.client, parameters=item, read_only=self.read_only)
                result = execute_operation(
                    context.get_parameter("resource"), context.get_parameter("operation"), context
                )
            except Exception as e:
                if not self.continue_on_fail:
                    raise
                if isinstance(e, JobberError):
                    logger.warning("Item %d failed, continuing: %s", index, e)
                else:
                    logger.exception("Item %d failed unexpectedly, continuing", index)
                output.append({"error": str(e)})
                continue

            if isinstance(result, list):
                output.extend(result)
            else:
                output.append(result)
        return output
