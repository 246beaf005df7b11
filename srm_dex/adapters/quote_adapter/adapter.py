from __future__ import annotations

from typing import Any

from srm_dex.adapters.quote_adapter.types import (
    QUOTE_BY_BUY_SHAPE,
    QUOTE_BY_SELL_SHAPE,
    QuoteParams,
    QuoteResult,
)
from srm_dex.core.adapters.BaseAdapter import BaseAdapter
from srm_dex.core.clients.protocols import SuiExecutionClientProtocol
from srm_dex.core.constants.base import ADAPTER_QUOTE
from srm_dex.core.constants.srm import (
    FUNC_QUOTE_BY_BUY,
    FUNC_QUOTE_BY_SELL,
    QUOTE_MODULE,
)
from srm_dex.core.utils.transaction import CallArgument, CallDescriptor, build_call


class QuoteAdapter(BaseAdapter):
    """Swap quotes from the ``quote`` module via dev-inspect simulation."""

    adapter_type = ADAPTER_QUOTE
    module_name = QUOTE_MODULE

    def __init__(
        self,
        config: dict[str, Any] | None = None,
        *,
        client: SuiExecutionClientProtocol | None = None,
        package_id: str | None = None,
    ):
        super().__init__(
            "quote_adapter", config, client=client, package_id=package_id
        )

    def build_quote_call(
        self, function: str, amount: int, params: QuoteParams
    ) -> CallDescriptor:
        return build_call(
            self.target(function),
            [
                CallArgument.u64(amount),
                CallArgument.boolean(params.is_a_to_b),
                CallArgument.u64(params.pool_balance_a),
                CallArgument.u64(params.pool_balance_b),
                CallArgument.u64(params.swap_fee),
                CallArgument.u64(params.lp_builder_fee),
                CallArgument.u64(params.burn_fee),
                CallArgument.u64(params.dev_royalty_fee),
                CallArgument.u64(params.rewards_fee),
            ],
        )

    async def get_quote_by_sell(
        self, sender: str, sell_amount: int, params: QuoteParams
    ) -> QuoteResult:
        """Quote the output received for selling ``sell_amount``."""
        descriptor = self.build_quote_call(FUNC_QUOTE_BY_SELL, sell_amount, params)
        return await self.simulate_and_decode(sender, descriptor, QUOTE_BY_SELL_SHAPE)

    async def get_quote_by_buy(
        self, sender: str, buy_amount: int, params: QuoteParams
    ) -> QuoteResult:
        """Quote the input required to receive ``buy_amount``."""
        descriptor = self.build_quote_call(FUNC_QUOTE_BY_BUY, buy_amount, params)
        return await self.simulate_and_decode(sender, descriptor, QUOTE_BY_BUY_SHAPE)
