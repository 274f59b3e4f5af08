SECRET_KEY = "test-secret"

DEVICE_HOST = "127.0.0.1"
DEVICE_PORT = 4370

CLOUD_HOST = "hr.example.test"
CLOUD_FALLBACK_IP = "203.0.113.10"
CLOUD_PATH = "/api/import-attendance"
CLOUD_TIMEOUT = 5

AUTO_SYNC_ENABLED = True
# Never start background jobs inside the test process.
SCHEDULER_AUTOSTART = False

LOG_LEVEL = "WARNING"
DEBUG = False
TESTING = True
