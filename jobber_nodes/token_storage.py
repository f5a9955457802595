import os
import json
import logging
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

# The host writes the current OAuth token set here as JSON.
ENV_VAR_NAME = "JOBBER_API_TOKEN"


def load_token() -> Optional[Dict[str, Any]]:
    """
    Loads the Jobber token dictionary from the JOBBER_API_TOKEN environment variable.

    Returns:
        The token dictionary if the variable exists and holds a JSON object, otherwise None.
    """
    token_str = os.getenv(ENV_VAR_NAME)
    if not token_str:
        logger.warning("%s environment variable not found.", ENV_VAR_NAME)
        return None
    try:
        token = json.loads(token_str)
    except json.JSONDecodeError:
        logger.error("Could not decode %s. Ensure it is valid JSON.", ENV_VAR_NAME)
        return None
    if not isinstance(token, dict):
        logger.error("%s must hold a JSON object.", ENV_VAR_NAME)
        return None
    return token
