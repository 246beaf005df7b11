from .adapter import SrmAdapter
from .types import (
    PoolBalances,
    PoolFees,
    PoolFound,
    PoolInfo,
    PoolLookup,
    PoolLookupFault,
    PoolNotFound,
)

__all__ = [
    "SrmAdapter",
    "PoolBalances",
    "PoolFees",
    "PoolInfo",
    "PoolLookup",
    "PoolFound",
    "PoolNotFound",
    "PoolLookupFault",
]
