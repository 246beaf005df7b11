"""Types for SrmAdapter (dataclasses, decode shapes, pool lookup outcomes)."""

from __future__ import annotations

from dataclasses import dataclass

from srm_dex.core.constants.srm import (
    FUNC_POOL_BALANCES,
    FUNC_POOL_FEES,
    FUNC_POOL_INFO,
)
from srm_dex.core.utils.decoding import DecodeShape, FieldKind, FieldSpec


@dataclass(frozen=True)
class PoolBalances:
    balance_a: int
    balance_b: int
    lp_supply: int


@dataclass(frozen=True)
class PoolFees:
    lp_builder_fee: int
    burn_fee: int
    creator_royalty_fee: int
    rewards_fee: int


@dataclass(frozen=True)
class PoolInfo:
    balance_a: int
    balance_b: int
    lp_supply: int
    lp_builder_fee: int
    burn_fee: int
    creator_royalty_fee: int
    rewards_fee: int
    swap_balance_a: int
    burn_balance_a: int
    burn_balance_b: int
    creator_balance_a: int
    reward_balance_a: int
    creator_royalty_wallet: str

    @property
    def balances(self) -> PoolBalances:
        return PoolBalances(self.balance_a, self.balance_b, self.lp_supply)

    @property
    def fees(self) -> PoolFees:
        return PoolFees(
            self.lp_builder_fee,
            self.burn_fee,
            self.creator_royalty_fee,
            self.rewards_fee,
        )


def _numeric(*names: str) -> tuple[FieldSpec, ...]:
    return tuple(FieldSpec(n) for n in names)


POOL_BALANCES_SHAPE = DecodeShape(
    operation=FUNC_POOL_BALANCES,
    fields=_numeric("balance_a", "balance_b", "lp_supply"),
    result_type=PoolBalances,
)

POOL_FEES_SHAPE = DecodeShape(
    operation=FUNC_POOL_FEES,
    fields=_numeric("lp_builder_fee", "burn_fee", "creator_royalty_fee", "rewards_fee"),
    result_type=PoolFees,
)

POOL_INFO_SHAPE = DecodeShape(
    operation=FUNC_POOL_INFO,
    fields=(
        *POOL_BALANCES_SHAPE.fields,
        *POOL_FEES_SHAPE.fields,
        *_numeric(
            "swap_balance_a",
            "burn_balance_a",
            "burn_balance_b",
            "creator_balance_a",
            "reward_balance_a",
        ),
        FieldSpec("creator_royalty_wallet", FieldKind.STRING),
    ),
    result_type=PoolInfo,
)


# Pool lookup outcomes. A missing pair is PoolNotFound, never an error.


@dataclass(frozen=True)
class PoolFound:
    pool_id: str


@dataclass(frozen=True)
class PoolNotFound:
    coin_type_a: str
    coin_type_b: str


@dataclass(frozen=True)
class PoolLookupFault:
    reason: str


PoolLookup = PoolFound | PoolNotFound | PoolLookupFault
