from __future__ import annotations

import json
import logging
import warnings
from datetime import datetime
from typing import Callable, Optional

import requests
from urllib3.exceptions import InsecureRequestWarning

from ..common.datetime_utils import now_local
from ..core.constants import CLOUD_USER_AGENT
from ..core.enums import SyncOutcome
from ..core.exceptions import CloudRejectedError, CloudTransmissionError
from .model import CloudEndpoint, DeliveryResponse, SyncResult

logger = logging.getLogger(__name__)


class CloudSyncDispatcher:
    """POSTs daily records to the HR cloud, falling back to a pinned IP.

    Note: The fallback is taken only when the primary attempt fails at the
    transport level (DNS, refused, TLS, timeout). A completed non-2xx answer
    is final.
    """

    def __init__(
        self,
        endpoint: CloudEndpoint,
        *,
        session: Optional[requests.Session] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._endpoint = endpoint
        self._session = session or requests.Session()
        self._clock = clock

    @property
    def endpoint(self) -> CloudEndpoint:
        return self._endpoint

    def _headers(self) -> dict:
        return {
            "Content-Type": "application/json",
            # Virtual-host routing still works when we dial the IP directly.
            "Host": self._endpoint.host,
            "User-Agent": CLOUD_USER_AGENT,
        }

    def deliver(self, payload: list[dict]) -> DeliveryResponse:
        body = json.dumps(payload)
        headers = self._headers()

        try:
            logger.info("Primary attempt: %s", self._endpoint.primary_url)
            resp = self._session.post(
                self._endpoint.primary_url,
                data=body,
                headers=headers,
                timeout=self._endpoint.timeout,
            )
            return DeliveryResponse(status_code=resp.status_code, body=resp.text)
        except requests.exceptions.RequestException as e:
            primary_error = str(e) or type(e).__name__
            logger.warning("Primary failed: %s. Trying IP fallback: %s...", primary_error, self._endpoint.fallback_ip)

        try:
            # Certificate cannot match a bare IP; verification is off for this call only.
            with warnings.catch_warnings():
                warnings.simplefilter("ignore", InsecureRequestWarning)
                resp = self._session.post(
                    self._endpoint.fallback_url,
                    data=body,
                    headers=headers,
                    timeout=self._endpoint.timeout,
                    verify=False,
                )
        except requests.exceptions.RequestException as e:
            fallback_error = str(e) or type(e).__name__
            logger.error("IP fallback failed: %s", fallback_error)
            raise CloudTransmissionError(primary_error, fallback_error) from e

        return DeliveryResponse(status_code=resp.status_code, body=resp.text, via_fallback=True)

    def dispatch(self, payload: list[dict], *, target_date: Optional[str] = None) -> SyncResult:
        if not payload:
            logger.info("No records for %s. Skipping sync.", target_date or "selected window")
            return SyncResult(
                outcome=SyncOutcome.SKIPPED,
                timestamp=self._clock(),
                target_date=target_date,
                message="No records for this date" if target_date else "No data to sync for selected filter",
            )

        logger.info("Dispatching %d record(s) to cloud...", len(payload))
        try:
            response = self.deliver(payload)
        except CloudTransmissionError as e:
            return SyncResult(
                outcome=SyncOutcome.ERROR,
                timestamp=self._clock(),
                target_date=target_date,
                record_count=len(payload),
                message=str(e),
            )

        logger.info("Cloud response status: %s%s", response.status_code, " (via IP fallback)" if response.via_fallback else "")
        logger.debug("Cloud response body: %s", response.body)

        outcome = SyncOutcome.SUCCESS
        message = None
        try:
            response.raise_for_status()
        except CloudRejectedError as e:
            logger.error("%s", e)
            outcome = SyncOutcome.FAILED
            message = str(e)

        return SyncResult(
            outcome=outcome,
            timestamp=self._clock(),
            target_date=target_date,
            record_count=len(payload),
            http_status=response.status_code,
            response=response.json_body(),
            message=message,
        )
