from .async_option import AsyncOption
from .option import Option
from .sync_option import SyncOption

__all__ = (
    "AsyncOption",
    "Option",
    "SyncOption",
)
