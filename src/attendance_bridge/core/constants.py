"""Constants and defaults.

Note: Keep policy values here; settings modules override them through env vars.
"""

DEFAULT_DEVICE_HOST = "192.168.18.144"
DEFAULT_DEVICE_PORT = 4370

DEFAULT_CONNECT_TIMEOUT_SECONDS = 10
DEFAULT_COOLDOWN_SECONDS = 15
DEFAULT_STUCK_RESET_SECONDS = 40

DEFAULT_CLOUD_HOST = "demo.jantrah.com"
DEFAULT_CLOUD_FALLBACK_IP = "72.60.181.228"
DEFAULT_CLOUD_PATH = "/project-mgm/web/hr/api/import-attendance"
DEFAULT_CLOUD_TIMEOUT_SECONDS = 30
CLOUD_USER_AGENT = "JTech-Attendance-Server/1.0"

# 00:00:01 local, so the job always sees a finished "yesterday".
DAILY_SYNC_HOUR = 0
DAILY_SYNC_MINUTE = 0
DAILY_SYNC_SECOND = 1

DEFAULT_DEVICE_SERIAL = "ZK-Device"
UNKNOWN_NAME = "Unknown"
UNKNOWN_USER_ID = "N/A"
EMPTY_CLOCK = "-"
