"""Exclusive, self-healing access to the single attendance terminal.

States: Idle -> Busy -> Idle, with a Cooldown window armed by any failure.
Requests never queue: a caller arriving while another action runs, or while
the device is cooling down, fails fast with a transient error.
"""
from __future__ import annotations

import json
import logging
import math
import threading
import time
from typing import Callable, Optional, TypeVar

from ..core.exceptions import DeviceBusyError, DeviceCommunicationError, DeviceCooldownError
from .connection import DeviceConnector
from .model import CoordinatorPolicy, CoordinatorState

logger = logging.getLogger(__name__)

T = TypeVar("T")

UNKNOWN_ERROR_MESSAGE = "Unknown Communication Error"


def normalize_error_message(error: BaseException) -> str:
    """Collapse whatever the device library raised into one readable message.

    Order: a structured ``message`` field, then the exception text, then a
    serialized form of its attributes, then its repr.
    """

    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message

    text = str(error)
    if text:
        return text

    payload = vars(error) if getattr(error, "__dict__", None) else list(error.args)
    if payload:
        try:
            return json.dumps(payload, default=str)
        except (TypeError, ValueError):
            pass

    return repr(error) or UNKNOWN_ERROR_MESSAGE


class DeviceAccessCoordinator:
    def __init__(
        self,
        connector: DeviceConnector,
        *,
        policy: Optional[CoordinatorPolicy] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._connector = connector
        self._policy = policy or CoordinatorPolicy()
        self._clock = clock

        # Flask workers and the scheduler thread share this object; the lock only
        # guards the flag transitions, never the device I/O itself.
        self._lock = threading.Lock()
        self._busy = False
        self._busy_since: Optional[float] = None
        self._cooldown_until = 0.0
        self._session = 0

    @property
    def policy(self) -> CoordinatorPolicy:
        return self._policy

    def state(self) -> CoordinatorState:
        with self._lock:
            return CoordinatorState(
                busy=self._busy,
                busy_since=self._busy_since,
                cooldown_until=self._cooldown_until,
            )

    def cooldown_remaining(self) -> int:
        with self._lock:
            return self._remaining(self._clock())

    def _remaining(self, now: float) -> int:
        if now >= self._cooldown_until:
            return 0
        return max(1, math.ceil(self._cooldown_until - now))

    def _acquire(self) -> int:
        with self._lock:
            now = self._clock()

            if now < self._cooldown_until:
                raise DeviceCooldownError(self._remaining(now))

            if self._busy and self._busy_since is not None and now - self._busy_since > self._policy.stuck_reset_seconds:
                logger.warning(
                    "Device busy for %.0fs without completing - performing emergency reset",
                    now - self._busy_since,
                )
                self._busy = False

            if self._busy:
                raise DeviceBusyError()

            self._busy = True
            self._busy_since = now
            self._session += 1
            return self._session

    def _release(self, session: int) -> None:
        with self._lock:
            # A session reset as stuck must not clear the flag of its successor.
            if session == self._session:
                self._busy = False
                self._busy_since = None

    def _arm_cooldown(self) -> None:
        with self._lock:
            self._cooldown_until = self._clock() + self._policy.cooldown_seconds

    def execute(self, action: Callable[..., T]) -> T:
        """Run ``action(connection)`` with exclusive access to the device.

        Raises DeviceCooldownError / DeviceBusyError without touching the
        device, or DeviceCommunicationError (after arming the cooldown) when
        connecting or the action itself fails.
        """

        session = self._acquire()
        device = None
        try:
            logger.info("Connecting to device %s...", self._connector.describe())
            device = self._connector.open(timeout=self._policy.connect_timeout)
            return action(device.connect())
        except Exception as e:
            message = normalize_error_message(e)
            logger.error("Device action error: %s", message)
            logger.warning("Triggering %ss cool down to allow firmware reset", self._policy.cooldown_seconds)
            self._arm_cooldown()
            raise DeviceCommunicationError(message) from e
        finally:
            # Also runs after a failed handshake so a half-open socket is closed.
            if device is not None:
                try:
                    device.disconnect()
                except Exception:
                    logger.debug("Device disconnect failed (socket already closed?)", exc_info=True)
            self._release(session)
