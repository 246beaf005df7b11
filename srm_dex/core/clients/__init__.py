from srm_dex.core.clients.protocols import SuiExecutionClientProtocol
from srm_dex.core.clients.SuiClient import SuiClient, SuiRpcError

__all__ = [
    "SuiClient",
    "SuiExecutionClientProtocol",
    "SuiRpcError",
]
