import logging
from typing import Any, Callable, Dict, Optional, Tuple, Union

from flask import Flask, Response, jsonify, redirect, request

from . import jobber_config
from .data_utilities import parse_flag
from .jobber_auth_flow import JobberOAuth2Credentials, get_valid_access_token
from .jobber_client_module import JobberClient
from .jobber_errors import (
    ApiError, DomainValidationError, InvalidInput, JobberError, MissingTokenError, NotFoundError,
    UnsupportedOperation,
)
from .jobber_models import WebhookEventPayload
from .load_options import OPTION_LOADERS
from .node import JobberNode
from .static_data import InMemoryStaticDataStore, JsonFileStaticDataStore, StaticDataStore
from .webhook import JobberWebhookHandler

logger = logging.getLogger(__name__)

EventSink = Callable[[WebhookEventPayload], None]
RouteResult = Union[Response, Tuple[Response, int]]


def _log_event(payload: WebhookEventPayload) -> None:
    logger.info("Jobber webhook accepted: id=%s topic=%s", payload.get("id"), payload.get("topic"))


def _status_for(error: JobberError) -> int:
    if isinstance(error, (UnsupportedOperation, InvalidInput)):
        return 400
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(error, DomainValidationError):
        return 422
    if isinstance(error, ApiError):
        return 502
    return 500


def build_default_store() -> StaticDataStore:
    if jobber_config.STATIC_DATA_PATH:
        return JsonFileStaticDataStore(jobber_config.STATIC_DATA_PATH)
    return InMemoryStaticDataStore()


def build_default_handler() -> JobberWebhookHandler:
    credentials = JobberOAuth2Credentials.from_env()
    return JobberWebhookHandler(
        event=jobber_config.WEBHOOK_EVENT,
        client_secret=credentials.client_secret,
        store=build_default_store(),
        verify_signature=jobber_config.WEBHOOK_VERIFY_SIGNATURE,
        deduplicate=jobber_config.WEBHOOK_DEDUPLICATE,
    )


def create_app(
    handler: Optional[JobberWebhookHandler] = None,
    client: Optional[JobberClient] = None,
    on_event: Optional[EventSink] = None,
    credentials: Optional[JobberOAuth2Credentials] = None,
) -> Flask:
    """
    Builds the Flask app. Anything not injected is built lazily from the
    environment on first use.
    """
    app = Flask(__name__)
    state: Dict[str, Any] = {"handler": handler, "client": client, "credentials": credentials}
    emit = on_event or _log_event

    def get_handler() -> JobberWebhookHandler:
        if state["handler"] is None:
            state["handler"] = build_default_handler()
        return state["handler"]

    def get_client() -> JobberClient:
        if state["client"] is None:
            state["client"] = JobberClient(token_resolver=get_valid_access_token)
        return state["client"]

    @app.route('/webhook', methods=['POST'])
    def jobber_webhook() -> RouteResult:
        """Jobber only needs an acknowledgement; dropped deliveries look the same to it."""
        payload = get_handler().handle(request.get_data(), request.headers)
        if payload is not None:
            emit(payload)
        return jsonify({"received": True})

    @app.route('/api/<string:resource>/<string:operation>', methods=['POST'])
    def execute_operation_route(resource: str, operation: str) -> RouteResult:
        """
        Runs one operation over a batch of items.
        Body: {"items": [{...parameters...}], "continueOnFail": false}
        """
        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            return jsonify({"error": "Invalid payload format. Expected a JSON object."}), 400
        items = data.get("items", [{}])
        if not isinstance(items, list) or not all(isinstance(i, dict) for i in items):
            return jsonify({"error": "'items' must be a list of objects"}), 400

        batch = [{**item, "resource": resource, "operation": operation} for item in items]
        try:
            node = JobberNode(
                get_client(),
                continue_on_fail=parse_flag(data.get("continueOnFail")),
                read_only=jobber_config.READ_ONLY,
            )
            return jsonify({"items": node.execute(batch)})
        except MissingTokenError as e:
            return jsonify({"error": str(e)}), 401
        except ApiError as e:
            logger.error("Jobber API call failed for %s/%s: %s", resource, operation, e)
            return jsonify({"error": str(e)}), _status_for(e)
        except JobberError as e:
            return jsonify({"error": str(e)}), _status_for(e)

    @app.route('/options/<string:kind>', methods=['GET'])
    def options_route(kind: str) -> RouteResult:
        """Dropdown options ({name, value}) for clients, jobs or quotes."""
        loader = OPTION_LOADERS.get(kind)
        if loader is None:
            return jsonify({"error": f"Unknown option list: {kind}"}), 404
        try:
            return jsonify({"options": loader(get_client())})
        except MissingTokenError as e:
            return jsonify({"error": str(e)}), 401
        except ApiError as e:
            logger.error("Loading %s options failed: %s", kind, e)
            return jsonify({"error": str(e)}), _status_for(e)

    @app.route('/authorize_jobber_start')
    def authorize_jobber_route() -> Response:
        """Redirects the user to Jobber's authorization page."""
        if state["credentials"] is None:
            state["credentials"] = JobberOAuth2Credentials.from_env()
        auth_url = state["credentials"].authorization_url()
        logger.info("Redirecting user to Jobber for authorization.")
        return redirect(auth_url)

    return app


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.info("Starting Flask web server for Jobber webhooks on port %d.", jobber_config.FLASK_PORT)
    create_app().run(debug=True, port=jobber_config.FLASK_PORT, use_reloader=False)
