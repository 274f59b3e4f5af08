class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class DeviceError(DomainError):
    """Base for failures at the attendance terminal boundary."""


class DeviceBusyError(DeviceError):
    """Another device action is in flight. No cooldown is armed."""

    def __init__(self, message: str = "Device is busy. Please try again in 5-10 seconds."):
        super().__init__(message)


class DeviceCooldownError(DeviceError):
    """Device is recovering after a failure; carries the remaining wait."""

    def __init__(self, remaining_seconds: int):
        self.remaining_seconds = int(remaining_seconds)
        super().__init__(f"Device recovery in progress... Please wait {self.remaining_seconds}s")


class DeviceCommunicationError(DeviceError):
    """Connect or action failure. Always arms the cooldown."""


class CloudError(DomainError):
    """Base for failures at the HR cloud boundary."""


class CloudTransmissionError(CloudError):
    """Primary host and fallback IP both failed at the transport level."""

    def __init__(self, primary_error: str, fallback_error: str):
        self.primary_error = primary_error
        self.fallback_error = fallback_error
        super().__init__(f"Cloud delivery failed (primary: {primary_error}; fallback: {fallback_error})")


class CloudRejectedError(CloudError):
    """The exchange completed but the endpoint answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str = ""):
        self.status_code = int(status_code)
        self.body = body
        super().__init__(f"Cloud sync failed with status {self.status_code}")
