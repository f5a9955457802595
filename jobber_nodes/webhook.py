"""Jobber webhook trigger.

Handles one inbound delivery at a time:
1. Verify the base64 HMAC-SHA256 of the raw body (keyed by the OAuth client secret)
2. Drop deliveries for topics other than the subscribed one
3. Drop repeated webhook ids (Jobber delivers at least once)
4. Emit the payload

Rejected deliveries are never errors: the sender just gets its acknowledgement
and nothing is emitted.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import logging
from enum import Enum
from typing import Any, List, Mapping, Optional, cast

from .jobber_config import DEDUP_WINDOW_SIZE, WEBHOOK_SIGNATURE_HEADER
from .jobber_models import WebhookEventPayload
from .static_data import StaticDataStore

logger = logging.getLogger(__name__)

PROCESSED_WEBHOOKS_KEY = "processedWebhooks"


class WebhookTopic(str, Enum):
    CLIENT_CREATE = "CLIENT_CREATE"
    CLIENT_UPDATE = "CLIENT_UPDATE"
    CLIENT_DESTROY = "CLIENT_DESTROY"
    JOB_CREATE = "JOB_CREATE"
    JOB_UPDATE = "JOB_UPDATE"
    JOB_DESTROY = "JOB_DESTROY"
    QUOTE_CREATE = "QUOTE_CREATE"
    QUOTE_UPDATE = "QUOTE_UPDATE"
    QUOTE_DESTROY = "QUOTE_DESTROY"
    INVOICE_CREATE = "INVOICE_CREATE"
    INVOICE_UPDATE = "INVOICE_UPDATE"
    INVOICE_DESTROY = "INVOICE_DESTROY"
    REQUEST_CREATE = "REQUEST_CREATE"
    REQUEST_UPDATE = "REQUEST_UPDATE"
    VISIT_COMPLETE = "VISIT_COMPLETE"


def compute_signature(secret: str, body: bytes) -> str:
    digest = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("utf-8")


def verify_signature(secret: str, body: bytes, signature: Optional[str]) -> bool:
    """Constant-time comparison of the received signature with the expected one."""
    if not signature:
        return False
    return hmac.compare_digest(compute_signature(secret, body), signature)


class DedupWindow:
    """The last `capacity` webhook ids seen for one scope, oldest evicted first."""

    def __init__(self, store: StaticDataStore, scope: str, capacity: int = DEDUP_WINDOW_SIZE) -> None:
        self._store = store
        self._scope = scope
        self._capacity = capacity

    def ids(self) -> List[str]:
        return list(self._store.get(self._scope, PROCESSED_WEBHOOKS_KEY, []) or [])

    def check_and_record(self, webhook_id: str) -> bool:
        """Return True if the id is new (and remember it), False if it was seen."""
        processed = self.ids()
        if webhook_id in processed:
            return False
        processed.append(webhook_id)
        if len(processed) > self._capacity:
            processed = processed[-self._capacity:]
        self._store.put(self._scope, PROCESSED_WEBHOOKS_KEY, processed)
        return True


def _topic_of(payload: Mapping[str, Any]) -> Optional[str]:
    topic = payload.get("topic")
    if topic:
        return str(topic)
    data = payload.get("data")
    if isinstance(data, dict):
        event = data.get("webHookEvent")
        if isinstance(event, dict) and event.get("topic"):
            return str(event["topic"])
    return None


class JobberWebhookHandler:
    """Webhook trigger for one subscribed event, owning its own dedup window."""

    def __init__(
        self,
        event: str,
        client_secret: str,
        store: StaticDataStore,
        scope: str = "jobber-trigger",
        verify_signature: bool = True,
        deduplicate: bool = True,
    ) -> None:
        self._event = WebhookTopic(event).value
        self._client_secret = client_secret
        self._verify = verify_signature
        self._deduplicate = deduplicate
        self._window = DedupWindow(store, scope)

    @property
    def event(self) -> str:
        return self._event

    def handle(self, body: bytes, headers: Mapping[str, str]) -> Optional[WebhookEventPayload]:
        """Return the payload to emit, or None when the delivery is dropped."""
        if self._verify:
            signature = self._header(headers, WEBHOOK_SIGNATURE_HEADER)
            if not verify_signature(self._client_secret, body, signature):
                logger.warning("Dropping webhook: signature missing or mismatched")
                return None

        try:
            payload = json.loads(body)
        except (UnicodeDecodeError, json.JSONDecodeError):
            logger.warning("Dropping webhook: body is not valid JSON")
            return None
        if not isinstance(payload, dict):
            logger.warning("Dropping webhook: body is not a JSON object")
            return None

        topic = _topic_of(payload)
        if topic and topic != self._event:
            logger.info("Dropping webhook: topic %s is not %s", topic, self._event)
            return None

        webhook_id = payload.get("id")
        if self._deduplicate and webhook_id:
            if not self._window.check_and_record(str(webhook_id)):
                logger.info("Dropping webhook: %s already processed", webhook_id)
                return None

        return cast(WebhookEventPayload, payload)

    @staticmethod
    def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
        value = headers.get(name)
        if value is not None:
            return value
        for key, candidate in headers.items():
            if key.lower() == name:
                return candidate
        return None
