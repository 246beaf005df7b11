from srm_dex.core.adapters.BaseAdapter import BaseAdapter

__all__ = [
    "BaseAdapter",
]
