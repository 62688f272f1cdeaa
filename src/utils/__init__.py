from utils.status import Status
from utils.response_format import ResponseFormat

__all__ = ["Status", "ResponseFormat"]
