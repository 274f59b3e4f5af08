from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType

from .attendance.service import AttendanceService
from .core import constants
from .device.connection import ZKConnector
from .device.coordinator import DeviceAccessCoordinator
from .device.model import CoordinatorPolicy, DeviceSettings
from .device.zk_device_repository import ZKDeviceRepository
from .sync.dispatcher import CloudSyncDispatcher
from .sync.model import CloudEndpoint
from .sync.scheduler import DailySyncScheduler
from .sync.service import SyncService


@dataclass(frozen=True)
class Container:
    device_settings: DeviceSettings
    coordinator: DeviceAccessCoordinator
    device_repo: ZKDeviceRepository

    attendance_service: AttendanceService
    dispatcher: CloudSyncDispatcher
    sync_service: SyncService
    daily_scheduler: DailySyncScheduler


def build_container(settings: ModuleType | object) -> Container:
    def setting(name: str, default):
        return getattr(settings, name, default)

    device_settings = DeviceSettings(
        host=str(setting("DEVICE_HOST", constants.DEFAULT_DEVICE_HOST)),
        port=int(setting("DEVICE_PORT", constants.DEFAULT_DEVICE_PORT)),
        password=int(setting("DEVICE_PASSWORD", 0)),
        force_udp=bool(setting("DEVICE_FORCE_UDP", False)),
        ommit_ping=bool(setting("DEVICE_OMMIT_PING", True)),
    )
    policy = CoordinatorPolicy(
        connect_timeout=float(setting("DEVICE_CONNECT_TIMEOUT", constants.DEFAULT_CONNECT_TIMEOUT_SECONDS)),
        cooldown_seconds=float(setting("DEVICE_COOLDOWN_SECONDS", constants.DEFAULT_COOLDOWN_SECONDS)),
        stuck_reset_seconds=float(setting("DEVICE_STUCK_RESET_SECONDS", constants.DEFAULT_STUCK_RESET_SECONDS)),
    )
    endpoint = CloudEndpoint(
        host=str(setting("CLOUD_HOST", constants.DEFAULT_CLOUD_HOST)),
        fallback_ip=str(setting("CLOUD_FALLBACK_IP", constants.DEFAULT_CLOUD_FALLBACK_IP)),
        path=str(setting("CLOUD_PATH", constants.DEFAULT_CLOUD_PATH)),
        timeout=float(setting("CLOUD_TIMEOUT", constants.DEFAULT_CLOUD_TIMEOUT_SECONDS)),
    )

    coordinator = DeviceAccessCoordinator(ZKConnector(device_settings), policy=policy)
    device_repo = ZKDeviceRepository(coordinator)

    attendance_service = AttendanceService(device_repo, device_settings)
    dispatcher = CloudSyncDispatcher(endpoint)
    sync_service = SyncService(attendance_service, dispatcher)
    daily_scheduler = DailySyncScheduler(sync_service, enabled=bool(setting("AUTO_SYNC_ENABLED", True)))

    return Container(
        device_settings=device_settings,
        coordinator=coordinator,
        device_repo=device_repo,
        attendance_service=attendance_service,
        dispatcher=dispatcher,
        sync_service=sync_service,
        daily_scheduler=daily_scheduler,
    )
