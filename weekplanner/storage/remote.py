from __future__ import annotations
import json
import logging
from typing import List, Optional

import requests

from weekplanner.core.exceptions import LoadFailure, SaveFailure
from weekplanner.core.models import PlannerSnapshot, WeekDay
from weekplanner.storage.wire import get_codec

logger = logging.getLogger(__name__)


class RemoteSyncClient:
    """Reads and writes the planner sheet through its web-app endpoint.

    Saves are fire-and-forget: once the request has been delivered its
    response is never looked at, so an endpoint that rejects the payload
    looks exactly like one that stored it.
    """

    def __init__(self, endpoint_url: str, week: List[WeekDay], wire_format: str = "tasks", timeout: float = 10):
        self.endpoint_url = endpoint_url
        self.week = week
        self.codec = get_codec(wire_format)
        self.timeout = timeout
        self.session = requests.Session()

    # ---------- read ----------
    def load(self) -> Optional[PlannerSnapshot]:
        params = self.codec.load_params(self.week)
        try:
            r = self.session.get(self.endpoint_url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise LoadFailure(f"Load request failed: {e}") from e
        if not r.ok:
            raise LoadFailure(f"Load failed: {r.status_code} {r.text[:200]}")
        if not r.text.strip():
            return None
        try:
            data = r.json()
        except ValueError as e:
            raise LoadFailure(f"Load returned invalid JSON: {e}") from e
        if not data:
            return None
        if not isinstance(data, dict):
            raise LoadFailure(f"Load returned unexpected payload type {type(data).__name__}")
        try:
            snapshot = self.codec.decode(data, self.week)
        except (TypeError, ValueError, OverflowError, AttributeError) as e:
            raise LoadFailure(f"Load returned a payload that could not be decoded: {e}") from e
        logger.info("Loaded planner (%s format, week of %s)", self.codec.name, self.week[0].full_date)
        return snapshot

    # ---------- write ----------
    def save(self, snapshot: PlannerSnapshot) -> None:
        body = json.dumps(self.codec.encode(snapshot, self.week))
        try:
            self.session.post(
                self.endpoint_url,
                data=body,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise SaveFailure(f"Save request failed: {e}") from e
        logger.debug("Save delivered (%d bytes)", len(body))
