"""Types for QuoteAdapter (dataclasses and decode shapes)."""

from __future__ import annotations

from dataclasses import dataclass

from srm_dex.core.constants.srm import FUNC_QUOTE_BY_BUY, FUNC_QUOTE_BY_SELL
from srm_dex.core.utils.decoding import DecodeShape, FieldSpec


@dataclass(frozen=True)
class QuoteParams:
    """Pool state and fee rates the quote functions price against."""

    is_a_to_b: bool
    pool_balance_a: int
    pool_balance_b: int
    swap_fee: int
    lp_builder_fee: int
    burn_fee: int
    dev_royalty_fee: int
    rewards_fee: int


@dataclass(frozen=True)
class QuoteResult:
    """Swap quote in raw on-chain units.

    ``amount_out`` is the output amount for a quote by sell and the required
    input amount for a quote by buy.
    """

    amount_out: int
    lp_builder_fee_in: int
    lp_builder_fee_out: int
    swap_fee: int
    burn_fee: int
    dev_fee: int
    rewards_fee: int


def quote_shape(operation: str, amount_label: str) -> DecodeShape[QuoteResult]:
    """Seven-field quote layout; ``amount_label`` names the leading amount."""
    return DecodeShape(
        operation=operation,
        fields=(
            FieldSpec(amount_label, attr="amount_out"),
            FieldSpec("lp_builder_fee_in"),
            FieldSpec("lp_builder_fee_out"),
            FieldSpec("swap_fee"),
            FieldSpec("burn_fee"),
            FieldSpec("dev_fee"),
            FieldSpec("rewards_fee"),
        ),
        result_type=QuoteResult,
    )


QUOTE_BY_SELL_SHAPE = quote_shape(FUNC_QUOTE_BY_SELL, "amount_out")
QUOTE_BY_BUY_SHAPE = quote_shape(FUNC_QUOTE_BY_BUY, "final_amount_in")
