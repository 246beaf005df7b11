# Timeout constants (seconds)
DEFAULT_HTTP_TIMEOUT = 30.0  # HTTP client timeout

DEFAULT_SUI_RPC_URL = "https://fullnode.mainnet.sui.io:443"

ADAPTER_QUOTE = "QUOTE"
ADAPTER_SRM = "SRM"

SUI_ADDRESS_LENGTH = 32

# Shared system objects
SUI_CLOCK_OBJECT_ID = "0x" + "6".rjust(SUI_ADDRESS_LENGTH * 2, "0")
SUI_CLOCK_INITIAL_SHARED_VERSION = 1
