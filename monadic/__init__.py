"""
Option and Result values that stay synchronous until a callback is not.

Core building blocks for short-circuiting pipelines over optional and
fallible values, with linear generator-based composition.

Architecture:
- Sync wrappers (SyncOption, SyncResult) hold a settled value
- Async wrappers (AsyncOption, AsyncResult) hold a memoized deferred computation
- Option and Result wrap one of the two and promote sync -> async, never back
- Generic drivers (*M functions) work with any wrapper family via resolve + pure
"""

# Core types
from ._types import Body, Effect, Mapper, OptionTag, Predicate, ResultTag, Step

# Internal helpers (for custom wrapper families)
from . import _helpers
from ._deferred import Deferred

# Optional values
from . import option
from .option import AsyncOption, Option, SyncOption

# Success / failure values
from . import result
from .result import AsyncResult, Result, SyncResult

# Composition drivers
from . import flow
from .flow import (
    Family,
    Flow,
    Pending,
    async_gen_adapterM,
    async_genM,
    gen_adapterM,
    genM,
)

# Errors
from ._errors import (
    UnwrapError,
    UnwrappedErrError,
    UnwrappedNoneError,
    UnwrappedOkError,
    YieldedValueError,
)

__all__ = (
    # Modules
    "flow",
    "option",
    "result",
    # Core types
    "Body",
    "Effect",
    "Mapper",
    "OptionTag",
    "Predicate",
    "ResultTag",
    "Step",
    "Deferred",
    # Option
    "Option",
    "SyncOption",
    "AsyncOption",
    # Result
    "Result",
    "SyncResult",
    "AsyncResult",
    # Drivers - mixed
    "Flow",
    # Drivers - Generic
    "Family",
    "Pending",
    "genM",
    "gen_adapterM",
    "async_genM",
    "async_gen_adapterM",
    # Errors
    "UnwrapError",
    "UnwrappedErrError",
    "UnwrappedNoneError",
    "UnwrappedOkError",
    "YieldedValueError",
)
