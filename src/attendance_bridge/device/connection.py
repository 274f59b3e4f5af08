from __future__ import annotations

from typing import Any, Protocol

from zk import ZK

from .model import DeviceSettings


class DeviceSession(Protocol):
    def connect(self) -> Any:
        """Complete the handshake and return the object actions run against."""

        raise NotImplementedError

    def disconnect(self) -> None:
        raise NotImplementedError


class DeviceConnector(Protocol):
    def describe(self) -> str:
        raise NotImplementedError

    def open(self, *, timeout: float) -> DeviceSession:
        """Build an unconnected session; the caller connects and disconnects it."""

        raise NotImplementedError


class ZKConnector:
    """Builds pyzk sessions against the currently configured terminal.

    Note: A new ``ZK`` object is built per session so host/port changes made at
    runtime are picked up by the next action.
    """

    def __init__(self, settings: DeviceSettings):
        self._settings = settings

    def describe(self) -> str:
        return f"{self._settings.host}:{self._settings.port}"

    def open(self, *, timeout: float) -> ZK:
        return ZK(
            self._settings.host,
            port=int(self._settings.port),
            timeout=int(timeout),
            password=int(self._settings.password or 0),
            force_udp=bool(self._settings.force_udp),
            ommit_ping=bool(self._settings.ommit_ping),
        )
