from .adapter import QuoteAdapter
from .types import QuoteParams, QuoteResult

__all__ = [
    "QuoteAdapter",
    "QuoteParams",
    "QuoteResult",
]
