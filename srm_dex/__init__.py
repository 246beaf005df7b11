__version__ = "0.1.0"

from srm_dex.adapters.quote_adapter import QuoteAdapter, QuoteParams, QuoteResult
from srm_dex.adapters.srm_adapter import (
    PoolBalances,
    PoolFees,
    PoolFound,
    PoolInfo,
    PoolLookup,
    PoolLookupFault,
    PoolNotFound,
    SrmAdapter,
)
from srm_dex.core import BaseAdapter
from srm_dex.core.clients import SuiClient, SuiRpcError
from srm_dex.core.utils.decoding import MalformedResult
from srm_dex.core.utils.transaction import CallDescriptor, EncodingError

__all__ = [
    "__version__",
    "BaseAdapter",
    "CallDescriptor",
    "EncodingError",
    "MalformedResult",
    "PoolBalances",
    "PoolFees",
    "PoolFound",
    "PoolInfo",
    "PoolLookup",
    "PoolLookupFault",
    "PoolNotFound",
    "QuoteAdapter",
    "QuoteParams",
    "QuoteResult",
    "SrmAdapter",
    "SuiClient",
    "SuiRpcError",
]
