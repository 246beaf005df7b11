QUOTE_MODULE = "quote"
FUNC_QUOTE_BY_SELL = "get_swap_quote_by_sell"
FUNC_QUOTE_BY_BUY = "get_swap_quote_by_buy"

SRM_MODULE = "SRMV1"
FUNC_POOL_BALANCES = "pool_balances"
FUNC_POOL_FEES = "get_pool_fees"
FUNC_POOL_INFO = "get_pool_info"

FUNC_SWAP_A_FOR_B = "swap_a_for_b_with_coins_and_transfer_to_sender"
FUNC_SWAP_B_FOR_A = "swap_b_for_a_with_coins_and_transfer_to_sender"
FUNC_ADD_LIQUIDITY = "add_liquidity_with_coins_and_transfer_to_sender"
FUNC_REMOVE_LIQUIDITY = "remove_liquidity_with_coins_and_transfer_to_sender"
FUNC_DEPOSIT_COIN_B = "deposit_coinB_tokens"
FUNC_DEPOSIT_LP = "deposit_lp_tokens"

# Key struct of the factory's pool table
POOL_ITEM_STRUCT = "PoolItem"
