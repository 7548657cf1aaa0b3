from .async_result import AsyncResult
from .result import Result
from .sync_result import SyncResult

__all__ = (
    "AsyncResult",
    "Result",
    "SyncResult",
)
