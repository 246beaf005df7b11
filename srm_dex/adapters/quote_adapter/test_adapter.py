from unittest.mock import AsyncMock, patch

import pytest

from srm_dex.adapters.quote_adapter.adapter import QuoteAdapter
from srm_dex.adapters.quote_adapter.types import (
    QUOTE_BY_BUY_SHAPE,
    QUOTE_BY_SELL_SHAPE,
    QuoteParams,
    QuoteResult,
)
from srm_dex.core.utils.decoding import MalformedResult, decode
from srm_dex.core.utils.transaction import ArgKind, CallArgument, EncodingError

PACKAGE = "0x" + "ab" * 32
SENDER = "0x" + "01" * 32

PARAMS = QuoteParams(
    is_a_to_b=True,
    pool_balance_a=5_000_000,
    pool_balance_b=9_000_000,
    swap_fee=30,
    lp_builder_fee=10,
    burn_fee=5,
    dev_royalty_fee=2,
    rewards_fee=1,
)


class TestQuoteAdapter:
    @pytest.fixture
    def mock_client(self):
        client = AsyncMock()
        client.simulate = AsyncMock(return_value=[[[1000, 5, 3, 2, 1, 1, 1]]])
        return client

    @pytest.fixture
    def adapter(self, mock_client):
        return QuoteAdapter(client=mock_client, package_id=PACKAGE)

    @pytest.mark.asyncio
    async def test_get_quote_by_sell(self, adapter, mock_client):
        result = await adapter.get_quote_by_sell(SENDER, 1_000_000, PARAMS)

        assert result == QuoteResult(
            amount_out=1000,
            lp_builder_fee_in=5,
            lp_builder_fee_out=3,
            swap_fee=2,
            burn_fee=1,
            dev_fee=1,
            rewards_fee=1,
        )
        descriptor, sender = mock_client.simulate.call_args.args
        assert sender == SENDER
        assert str(descriptor.target) == f"{PACKAGE}::quote::get_swap_quote_by_sell"
        assert descriptor.type_arguments == ()

    @pytest.mark.asyncio
    async def test_quote_arguments_follow_declared_order(self, adapter, mock_client):
        await adapter.get_quote_by_sell(SENDER, 1_000_000, PARAMS)

        descriptor = mock_client.simulate.call_args.args[0]
        assert descriptor.arguments == (
            CallArgument.u64(1_000_000),
            CallArgument.boolean(True),
            CallArgument.u64(5_000_000),
            CallArgument.u64(9_000_000),
            CallArgument.u64(30),
            CallArgument.u64(10),
            CallArgument.u64(5),
            CallArgument.u64(2),
            CallArgument.u64(1),
        )
        assert [a.kind for a in descriptor.arguments].count(ArgKind.BOOL) == 1

    @pytest.mark.asyncio
    async def test_get_quote_by_buy(self, adapter, mock_client):
        mock_client.simulate = AsyncMock(return_value=[[[2500, 7, 4, 3, 2, 1, 0]]])

        result = await adapter.get_quote_by_buy(SENDER, 2000, PARAMS)

        assert result.amount_out == 2500
        assert result.rewards_fee == 0
        descriptor = mock_client.simulate.call_args.args[0]
        assert descriptor.target.function == "get_swap_quote_by_buy"
        assert descriptor.arguments[0] == CallArgument.u64(2000)

    @pytest.mark.asyncio
    async def test_values_above_double_precision_are_exact(self, adapter, mock_client):
        big = 2**64 - 1
        mock_client.simulate = AsyncMock(return_value=[[[big, 0, 0, 0, 0, 0, 0]]])

        result = await adapter.get_quote_by_sell(SENDER, 1, PARAMS)

        assert result.amount_out == big

    @pytest.mark.asyncio
    @pytest.mark.parametrize("results", [[], [[]], [[None]], [["garbage"]]])
    async def test_malformed_simulation_raises(self, adapter, mock_client, results):
        mock_client.simulate = AsyncMock(return_value=results)

        with pytest.raises(MalformedResult) as exc_info:
            await adapter.get_quote_by_sell(SENDER, 1, PARAMS)
        assert exc_info.value.operation == "get_swap_quote_by_sell"

    @pytest.mark.asyncio
    async def test_malformed_quote_by_buy_names_operation(self, adapter, mock_client):
        mock_client.simulate = AsyncMock(return_value=[[[1, 2, 3]]])

        with pytest.raises(MalformedResult) as exc_info:
            await adapter.get_quote_by_buy(SENDER, 1, PARAMS)
        assert exc_info.value.operation == "get_swap_quote_by_buy"

    @pytest.mark.asyncio
    async def test_encoding_error_skips_simulation(self, adapter, mock_client):
        with pytest.raises(EncodingError):
            await adapter.get_quote_by_sell(SENDER, -5, PARAMS)
        mock_client.simulate.assert_not_called()

    @pytest.mark.asyncio
    async def test_client_errors_propagate(self, adapter, mock_client):
        mock_client.simulate = AsyncMock(side_effect=RuntimeError("node down"))

        with pytest.raises(RuntimeError, match="node down"):
            await adapter.get_quote_by_sell(SENDER, 1, PARAMS)

    def test_requires_package_id(self, mock_client):
        with patch(
            "srm_dex.core.adapters.BaseAdapter.get_package_id", return_value=None
        ):
            with pytest.raises(ValueError, match="requires a package id"):
                QuoteAdapter(client=mock_client)

    def test_package_id_from_config(self, mock_client):
        adapter = QuoteAdapter({"package_id": "0xabc"}, client=mock_client)
        assert adapter.package_id == "0x" + "0" * 61 + "abc"

    def test_adapter_type(self, adapter):
        assert adapter.adapter_type == "QUOTE"


class TestQuoteShapes:
    def test_sell_and_buy_share_layout(self):
        assert [f.target for f in QUOTE_BY_SELL_SHAPE.fields] == [
            f.target for f in QUOTE_BY_BUY_SHAPE.fields
        ]
        assert QUOTE_BY_SELL_SHAPE.fields[0].name == "amount_out"
        assert QUOTE_BY_BUY_SHAPE.fields[0].name == "final_amount_in"

    def test_example_row(self):
        assert decode(QUOTE_BY_SELL_SHAPE, [1000, 5, 3, 2, 1, 1, 1]) == QuoteResult(
            1000, 5, 3, 2, 1, 1, 1
        )
