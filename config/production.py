import os

from . import env_bool

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEVICE_HOST = os.getenv("DEVICE_HOST", "192.168.18.144")
DEVICE_PORT = int(os.getenv("DEVICE_PORT", "4370"))
DEVICE_PASSWORD = int(os.getenv("DEVICE_PASSWORD", "0"))
DEVICE_FORCE_UDP = env_bool("DEVICE_FORCE_UDP", False)
DEVICE_OMMIT_PING = env_bool("DEVICE_OMMIT_PING", True)

DEVICE_CONNECT_TIMEOUT = float(os.getenv("DEVICE_CONNECT_TIMEOUT", "10"))
DEVICE_COOLDOWN_SECONDS = float(os.getenv("DEVICE_COOLDOWN_SECONDS", "15"))
DEVICE_STUCK_RESET_SECONDS = float(os.getenv("DEVICE_STUCK_RESET_SECONDS", "40"))

CLOUD_HOST = os.getenv("CLOUD_HOST", "demo.jantrah.com")
CLOUD_FALLBACK_IP = os.getenv("CLOUD_FALLBACK_IP", "72.60.181.228")
CLOUD_PATH = os.getenv("CLOUD_PATH", "/project-mgm/web/hr/api/import-attendance")
CLOUD_TIMEOUT = float(os.getenv("CLOUD_TIMEOUT", "30"))

AUTO_SYNC_ENABLED = env_bool("AUTO_SYNC_ENABLED", True)
SCHEDULER_AUTOSTART = env_bool("SCHEDULER_AUTOSTART", True)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
DEBUG = False
