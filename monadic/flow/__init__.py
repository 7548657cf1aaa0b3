from .drive import Pending, async_gen_adapterM, async_genM, binder, gen_adapterM, genM
from .family import Family, Flow, mixed

__all__ = (
    # Mixed Option / Result
    "Flow",
    # Generic
    "Family",
    "Pending",
    "binder",
    "genM",
    "gen_adapterM",
    "async_genM",
    "async_gen_adapterM",
    "mixed",
)
