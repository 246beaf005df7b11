from __future__ import annotations

from typing import Any

from srm_dex.adapters.srm_adapter.types import (
    POOL_BALANCES_SHAPE,
    POOL_FEES_SHAPE,
    POOL_INFO_SHAPE,
    PoolBalances,
    PoolFees,
    PoolFound,
    PoolInfo,
    PoolLookup,
    PoolLookupFault,
    PoolNotFound,
)
from srm_dex.core.adapters.BaseAdapter import BaseAdapter
from srm_dex.core.clients.protocols import SuiExecutionClientProtocol
from srm_dex.core.constants.base import ADAPTER_SRM, SUI_CLOCK_OBJECT_ID
from srm_dex.core.constants.srm import (
    FUNC_ADD_LIQUIDITY,
    FUNC_DEPOSIT_COIN_B,
    FUNC_DEPOSIT_LP,
    FUNC_POOL_BALANCES,
    FUNC_POOL_FEES,
    FUNC_POOL_INFO,
    FUNC_REMOVE_LIQUIDITY,
    FUNC_SWAP_A_FOR_B,
    FUNC_SWAP_B_FOR_A,
    POOL_ITEM_STRUCT,
    SRM_MODULE,
)
from srm_dex.core.utils.sui import normalize_sui_object_id
from srm_dex.core.utils.transaction import (
    CallArgument,
    CallBuilder,
    CallDescriptor,
    build_call,
)


def _dig(payload: Any, *keys: str) -> Any:
    for key in keys:
        if not isinstance(payload, dict):
            return None
        payload = payload.get(key)
    return payload


class SrmAdapter(BaseAdapter):
    """Pool reads, pool lookup and entry-point builders for the SRMV1 module.

    Reads are simulated with dev-inspect; builders only assemble call
    descriptors and never touch the network.
    """

    adapter_type = ADAPTER_SRM
    module_name = SRM_MODULE

    def __init__(
        self,
        config: dict[str, Any] | None = None,
        *,
        client: SuiExecutionClientProtocol | None = None,
        package_id: str | None = None,
    ):
        super().__init__("srm_adapter", config, client=client, package_id=package_id)

    # ------------------------------------------------------------------
    # Pool reads
    # ------------------------------------------------------------------

    def build_pool_read_call(
        self, function: str, pool_id: str, coin_type_a: str, coin_type_b: str
    ) -> CallDescriptor:
        return build_call(
            self.target(function),
            [CallArgument.object(pool_id)],
            [coin_type_a, coin_type_b],
        )

    async def get_pool_balances(
        self, sender: str, pool_id: str, coin_type_a: str, coin_type_b: str
    ) -> PoolBalances:
        """Balances of coin A, coin B and the LP supply."""
        descriptor = self.build_pool_read_call(
            FUNC_POOL_BALANCES, pool_id, coin_type_a, coin_type_b
        )
        return await self.simulate_and_decode(sender, descriptor, POOL_BALANCES_SHAPE)

    async def get_pool_fees(
        self, sender: str, pool_id: str, coin_type_a: str, coin_type_b: str
    ) -> PoolFees:
        """Configured fee rates of the pool."""
        descriptor = self.build_pool_read_call(
            FUNC_POOL_FEES, pool_id, coin_type_a, coin_type_b
        )
        return await self.simulate_and_decode(sender, descriptor, POOL_FEES_SHAPE)

    async def get_pool_info(
        self, sender: str, pool_id: str, coin_type_a: str, coin_type_b: str
    ) -> PoolInfo:
        """Balances, fees, accrued fee balances and the creator royalty wallet."""
        descriptor = self.build_pool_read_call(
            FUNC_POOL_INFO, pool_id, coin_type_a, coin_type_b
        )
        return await self.simulate_and_decode(sender, descriptor, POOL_INFO_SHAPE)

    # ------------------------------------------------------------------
    # Pool lookup
    # ------------------------------------------------------------------

    def pool_item_type(self) -> str:
        return f"{self.package_id}::{self.module_name}::{POOL_ITEM_STRUCT}"

    async def get_pool_id_from_factory(
        self, factory_id: str, coin_type_a: str, coin_type_b: str
    ) -> PoolLookup:
        """Look up the pool registered in the factory table for ``(A, B)``."""
        try:
            factory = await self.client.get_object(factory_id, show_content=True)
        except Exception as exc:  # noqa: BLE001
            self.logger.error(f"Error loading factory {factory_id}: {exc}")
            return PoolLookupFault(f"Could not load factory {factory_id}: {exc}")

        table_id = _dig(
            factory, "data", "content", "fields", "pools", "fields", "id", "id"
        )
        if not table_id:
            return PoolLookupFault("Could not locate table ID in factory object")

        name = {
            "type": self.pool_item_type(),
            "value": {"a": coin_type_a, "b": coin_type_b},
        }
        try:
            field = await self.client.get_dynamic_field_object(table_id, name)
        except Exception as exc:  # noqa: BLE001
            self.logger.error(f"Error reading pool table {table_id}: {exc}")
            return PoolLookupFault(f"Could not read pool table {table_id}: {exc}")

        if field is None:
            self.logger.debug(f"No pool registered for {coin_type_a}/{coin_type_b}")
            return PoolNotFound(coin_type_a, coin_type_b)

        pool_id = _dig(field, "data", "content", "fields", "value")
        try:
            return PoolFound(normalize_sui_object_id(pool_id))
        except (TypeError, ValueError) as exc:
            return PoolLookupFault(f"Pool table entry has no usable pool id: {exc}")

    # ------------------------------------------------------------------
    # Entry-point builders
    # ------------------------------------------------------------------

    def _build_swap_entry(
        self,
        function: str,
        *,
        pool_id: str,
        config_id: str,
        coin_object_id: str,
        amount_in: int | str,
        min_amount_out: int | str,
        coin_type_a: str,
        coin_type_b: str,
        clock_object_id: str,
    ) -> CallDescriptor:
        return build_call(
            self.target(function),
            [
                CallArgument.object(pool_id),
                CallArgument.object(config_id),
                CallArgument.object(coin_object_id),
                CallArgument.u64(amount_in),
                CallArgument.u64(min_amount_out),
                CallArgument.object(clock_object_id),
            ],
            [coin_type_a, coin_type_b],
        )

    def build_swap_a_for_b_entry(
        self,
        *,
        pool_id: str,
        config_id: str,
        coin_object_id: str,
        amount_in: int | str,
        min_amount_out: int | str,
        coin_type_a: str,
        coin_type_b: str,
        clock_object_id: str = SUI_CLOCK_OBJECT_ID,
    ) -> CallDescriptor:
        """Swap coin A for coin B; the output is sent to the sender."""
        return self._build_swap_entry(
            FUNC_SWAP_A_FOR_B,
            pool_id=pool_id,
            config_id=config_id,
            coin_object_id=coin_object_id,
            amount_in=amount_in,
            min_amount_out=min_amount_out,
            coin_type_a=coin_type_a,
            coin_type_b=coin_type_b,
            clock_object_id=clock_object_id,
        )

    def build_swap_b_for_a_entry(
        self,
        *,
        pool_id: str,
        config_id: str,
        coin_object_id: str,
        amount_in: int | str,
        min_amount_out: int | str,
        coin_type_a: str,
        coin_type_b: str,
        clock_object_id: str = SUI_CLOCK_OBJECT_ID,
    ) -> CallDescriptor:
        """Swap coin B for coin A; the output is sent to the sender."""
        return self._build_swap_entry(
            FUNC_SWAP_B_FOR_A,
            pool_id=pool_id,
            config_id=config_id,
            coin_object_id=coin_object_id,
            amount_in=amount_in,
            min_amount_out=min_amount_out,
            coin_type_a=coin_type_a,
            coin_type_b=coin_type_b,
            clock_object_id=clock_object_id,
        )

    def build_add_liquidity_tx(
        self,
        *,
        pool_id: str,
        coin_a: str,
        amount_a: int,
        coin_b: str,
        amount_b: int,
        min_lp_out: int,
        coin_type_a: str,
        coin_type_b: str,
        clock_object_id: str = SUI_CLOCK_OBJECT_ID,
    ) -> CallDescriptor:
        builder = CallBuilder(
            self.target(FUNC_ADD_LIQUIDITY), [coin_type_a, coin_type_b]
        )
        split_a = builder.split_coin(coin_a, amount_a)
        split_b = builder.split_coin(coin_b, amount_b)
        builder.add(
            CallArgument.object(pool_id),
            split_a,
            CallArgument.u64(amount_a),
            split_b,
            CallArgument.u64(amount_b),
            CallArgument.u64(min_lp_out),
            CallArgument.object(clock_object_id),
        )
        return builder.build()

    def build_remove_liquidity_tx(
        self,
        *,
        pool_id: str,
        lp_coin_id: str,
        lp_amount: int,
        min_a_out: int,
        min_b_out: int,
        coin_type_a: str,
        coin_type_b: str,
        clock_object_id: str = SUI_CLOCK_OBJECT_ID,
    ) -> CallDescriptor:
        builder = CallBuilder(
            self.target(FUNC_REMOVE_LIQUIDITY), [coin_type_a, coin_type_b]
        )
        split_lp = builder.split_coin(lp_coin_id, lp_amount)
        builder.add(
            CallArgument.object(pool_id),
            split_lp,
            CallArgument.u64(lp_amount),
            CallArgument.u64(min_a_out),
            CallArgument.u64(min_b_out),
            CallArgument.object(clock_object_id),
        )
        return builder.build()

    def build_deposit_coin_b_tx(
        self,
        *,
        pool_id: str,
        coin_b: str,
        amount: int,
        coin_type_a: str,
        coin_type_b: str,
        clock_object_id: str = SUI_CLOCK_OBJECT_ID,
    ) -> CallDescriptor:
        """Deposit coin B into the pool for manual burning."""
        builder = CallBuilder(
            self.target(FUNC_DEPOSIT_COIN_B), [coin_type_a, coin_type_b]
        )
        split_b = builder.split_coin(coin_b, amount)
        builder.add(
            CallArgument.object(pool_id),
            split_b,
            CallArgument.u64(amount),
            CallArgument.object(clock_object_id),
        )
        return builder.build()

    def build_deposit_lp_tokens_tx(
        self,
        *,
        pool_id: str,
        lp_token_id: str,
        amount: int,
        coin_type_a: str,
        coin_type_b: str,
    ) -> CallDescriptor:
        """Lock LP tokens in the pool."""
        builder = CallBuilder(self.target(FUNC_DEPOSIT_LP), [coin_type_a, coin_type_b])
        split_lp = builder.split_coin(lp_token_id, amount)
        builder.add(
            CallArgument.object(pool_id),
            split_lp,
            CallArgument.u64(amount),
        )
        return builder.build()
