from enum import Enum


class PaymentOutcome(str, Enum):
    SUCCESS = "success"
    FAILED  = "failed"
    UNKNOWN = "unknown"


class ProcessingPhase(str, Enum):
    PENDING   = "PENDING"
    SUCCEEDED = "SUCCEEDED"
    FAILED    = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self is not ProcessingPhase.PENDING


class NotificationKind(str, Enum):
    LOADING = "loading"
    SUCCESS = "success"
    ERROR   = "error"
