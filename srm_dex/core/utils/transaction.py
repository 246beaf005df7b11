from __future__ import annotations

import base64
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pysui.sui.sui_types import bcs as sui_bcs

from srm_dex.core.utils.bcs import (
    address_tag,
    encode_address,
    encode_bool,
    encode_bytes,
    encode_u64,
    parse_type_tag,
    to_type_tag,
    variant,
)
from srm_dex.core.utils.sui import normalize_sui_object_id

# Variant indexes of the programmable transaction enums
_TRANSACTION_KIND_PROGRAMMABLE = 0
_CALL_ARG_PURE = 0
_CALL_ARG_OBJECT = 1
_OBJECT_ARG_SHARED = 1
_COMMAND_MOVE_CALL = 0
_COMMAND_SPLIT_COINS = 2
_ARGUMENT_INPUT = 1
_ARGUMENT_NESTED_RESULT = 3


class EncodingError(ValueError):
    pass


class ArgKind(StrEnum):
    U64 = "u64"
    BOOL = "bool"
    ADDRESS = "address"
    BYTES = "vector<u8>"
    OBJECT = "object"
    SPLIT = "split"


_PURE_KINDS = {ArgKind.U64, ArgKind.BOOL, ArgKind.ADDRESS, ArgKind.BYTES}


@dataclass(frozen=True)
class CallTarget:
    package: str
    module: str
    function: str

    def __str__(self) -> str:
        return f"{self.package}::{self.module}::{self.function}"


@dataclass(frozen=True)
class CallArgument:
    kind: ArgKind
    value: Any

    @classmethod
    def u64(cls, value: int | str) -> CallArgument:
        return cls(ArgKind.U64, value)

    @classmethod
    def boolean(cls, value: bool) -> CallArgument:
        return cls(ArgKind.BOOL, value)

    @classmethod
    def address(cls, value: str) -> CallArgument:
        return cls(ArgKind.ADDRESS, value)

    @classmethod
    def raw_bytes(cls, value: bytes) -> CallArgument:
        return cls(ArgKind.BYTES, value)

    @classmethod
    def object(cls, object_id: str) -> CallArgument:
        return cls(ArgKind.OBJECT, object_id)

    @classmethod
    def split_result(cls, index: int) -> CallArgument:
        """Reference the coin carved out by the ``index``-th split."""
        return cls(ArgKind.SPLIT, index)

    @property
    def is_pure(self) -> bool:
        return self.kind in _PURE_KINDS

    def encode(self) -> bytes:
        """BCS bytes of a pure argument."""
        try:
            if self.kind is ArgKind.U64:
                value = self.value
                if isinstance(value, str) and value.strip().isdigit():
                    value = int(value.strip())
                return encode_u64(value)
            if self.kind is ArgKind.BOOL:
                return encode_bool(self.value)
            if self.kind is ArgKind.ADDRESS:
                return encode_address(self.value)
            if self.kind is ArgKind.BYTES:
                return encode_bytes(self.value)
        except (TypeError, ValueError) as exc:
            raise EncodingError(
                f"Cannot encode {self.value!r} as {self.kind.value}: {exc}"
            ) from exc
        raise EncodingError(f"{self.kind.value} arguments are not pure values")

    def object_id(self) -> str:
        try:
            return normalize_sui_object_id(self.value)
        except (TypeError, ValueError) as exc:
            raise EncodingError(f"Invalid object id {self.value!r}: {exc}") from exc


@dataclass(frozen=True)
class SplitCoin:
    coin: CallArgument
    amount: CallArgument


@dataclass(frozen=True)
class CallDescriptor:
    """A single Move call plus the coin splits it consumes.

    Splits run first, in order; an argument of kind ``SPLIT`` refers to the
    coin produced by the split at that index.
    """

    target: CallTarget
    arguments: tuple[CallArgument, ...]
    type_arguments: tuple[str, ...] = ()
    splits: tuple[SplitCoin, ...] = ()

    def __post_init__(self) -> None:
        try:
            normalize_sui_object_id(self.target.package)
        except (TypeError, ValueError) as exc:
            raise EncodingError(f"Invalid package id in {self.target}: {exc}") from exc
        if not self.target.module or not self.target.function:
            raise EncodingError(f"Incomplete call target: {self.target}")

        for type_arg in self.type_arguments:
            try:
                parse_type_tag(type_arg)
            except (TypeError, ValueError) as exc:
                raise EncodingError(f"Invalid type argument {type_arg!r}") from exc

        for split in self.splits:
            if split.coin.kind is not ArgKind.OBJECT:
                raise EncodingError("Split source must be an object argument")
            if split.amount.kind is not ArgKind.U64:
                raise EncodingError("Split amount must be a u64 argument")
            split.coin.object_id()
            split.amount.encode()

        for arg in self.arguments:
            self._check_argument(arg)

    def _check_argument(self, arg: CallArgument) -> None:
        if arg.is_pure:
            arg.encode()
        elif arg.kind is ArgKind.OBJECT:
            arg.object_id()
        elif arg.kind is ArgKind.SPLIT:
            if (
                isinstance(arg.value, bool)
                or not isinstance(arg.value, int)
                or not 0 <= arg.value < len(self.splits)
            ):
                raise EncodingError(
                    f"Split reference {arg.value!r} does not name one of "
                    f"{len(self.splits)} splits"
                )
        else:
            raise EncodingError(f"Unknown argument kind: {arg.kind!r}")

    def object_ids(self) -> list[str]:
        ids: list[str] = []
        for arg in self._input_arguments():
            if arg.kind is ArgKind.OBJECT and arg.object_id() not in ids:
                ids.append(arg.object_id())
        return ids

    def _input_arguments(self) -> list[CallArgument]:
        ordered: list[CallArgument] = []
        for split in self.splits:
            ordered.extend([split.coin, split.amount])
        ordered.extend(a for a in self.arguments if a.kind is not ArgKind.SPLIT)
        return ordered

    def _layout(self) -> tuple[list[CallArgument], dict[int, int]]:
        """Inputs in transaction order, with object inputs de-duplicated.

        Returns the inputs and a map from ``id()`` of each input argument to
        its input index.
        """
        inputs: list[CallArgument] = []
        index_of: dict[int, int] = {}
        object_index: dict[str, int] = {}
        for arg in self._input_arguments():
            if arg.kind is ArgKind.OBJECT:
                object_id = arg.object_id()
                if object_id not in object_index:
                    object_index[object_id] = len(inputs)
                    inputs.append(arg)
                index_of[id(arg)] = object_index[object_id]
            elif id(arg) not in index_of:
                index_of[id(arg)] = len(inputs)
                inputs.append(arg)
        return inputs, index_of

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe programmable transaction, suitable for a signer to submit."""
        inputs, index_of = self._layout()

        def ref(arg: CallArgument) -> dict[str, Any]:
            if arg.kind is ArgKind.SPLIT:
                return {"kind": "NestedResult", "index": arg.value, "resultIndex": 0}
            return {"kind": "Input", "index": index_of[id(arg)]}

        serialized_inputs = []
        for idx, arg in enumerate(inputs):
            if arg.kind is ArgKind.OBJECT:
                serialized_inputs.append(
                    {"index": idx, "type": "object", "value": arg.object_id()}
                )
            else:
                serialized_inputs.append(
                    {
                        "index": idx,
                        "type": "pure",
                        "valueType": arg.kind.value,
                        "value": base64.b64encode(arg.encode()).decode(),
                    }
                )

        transactions: list[dict[str, Any]] = [
            {"kind": "SplitCoins", "coin": ref(s.coin), "amounts": [ref(s.amount)]}
            for s in self.splits
        ]
        transactions.append(
            {
                "kind": "MoveCall",
                "target": str(self.target),
                "typeArguments": list(self.type_arguments),
                "arguments": [ref(a) for a in self.arguments],
            }
        )
        return {"version": 1, "inputs": serialized_inputs, "transactions": transactions}


def build_call(
    target: CallTarget,
    arguments: Iterable[CallArgument],
    type_arguments: Iterable[str] = (),
    *,
    splits: Iterable[SplitCoin] = (),
) -> CallDescriptor:
    """Assemble a call descriptor; arguments keep the callee's declared order."""
    return CallDescriptor(
        target=target,
        arguments=tuple(arguments),
        type_arguments=tuple(type_arguments),
        splits=tuple(splits),
    )


class CallBuilder:
    """Two-step builder for calls that consume split coins.

    ``split_coin`` records the split and hands back the reference to place in
    the argument list, so the dependency is explicit rather than positional.
    """

    def __init__(self, target: CallTarget, type_arguments: Iterable[str] = ()):
        self.target = target
        self.type_arguments = tuple(type_arguments)
        self._arguments: list[CallArgument] = []
        self._splits: list[SplitCoin] = []

    def split_coin(self, coin_id: str, amount: int | str) -> CallArgument:
        self._splits.append(
            SplitCoin(
                coin=CallArgument.object(coin_id), amount=CallArgument.u64(amount)
            )
        )
        return CallArgument.split_result(len(self._splits) - 1)

    def add(self, *arguments: CallArgument) -> CallBuilder:
        self._arguments.extend(arguments)
        return self

    def build(self) -> CallDescriptor:
        return build_call(
            self.target, self._arguments, self.type_arguments, splits=self._splits
        )


def shared_object_arg(
    object_id: str, initial_shared_version: int, *, mutable: bool
) -> sui_bcs.ObjectArg:
    """``ObjectArg::SharedObject`` for ``build_transaction_kind``."""
    return variant(
        sui_bcs.ObjectArg,
        _OBJECT_ARG_SHARED,
        sui_bcs.SharedObjectReference(
            address_tag(object_id), int(initial_shared_version), mutable
        ),
    )


def _argument(arg: CallArgument, index_of: Mapping[int, int]) -> sui_bcs.Argument:
    if arg.kind is ArgKind.SPLIT:
        nested = sui_bcs.NestedResult(arg.value, 0)
        return variant(sui_bcs.Argument, _ARGUMENT_NESTED_RESULT, nested)
    return variant(sui_bcs.Argument, _ARGUMENT_INPUT, index_of[id(arg)])


def build_transaction_kind(
    descriptor: CallDescriptor, object_args: Mapping[str, sui_bcs.ObjectArg]
) -> sui_bcs.TransactionKind:
    """Programmable ``TransactionKind`` for a dev-inspect simulation.

    ``object_args`` maps each normalized object id in the descriptor to its
    already-resolved ``ObjectArg``.
    """
    inputs, index_of = descriptor._layout()

    call_args: list[sui_bcs.CallArg] = []
    for arg in inputs:
        if arg.kind is ArgKind.OBJECT:
            object_id = arg.object_id()
            if object_id not in object_args:
                raise EncodingError(f"Object {object_id} was not resolved")
            call_args.append(
                variant(sui_bcs.CallArg, _CALL_ARG_OBJECT, object_args[object_id])
            )
        else:
            call_args.append(
                variant(sui_bcs.CallArg, _CALL_ARG_PURE, list(arg.encode()))
            )

    def ref(arg: CallArgument) -> sui_bcs.Argument:
        return _argument(arg, index_of)

    commands: list[sui_bcs.Command] = [
        variant(
            sui_bcs.Command,
            _COMMAND_SPLIT_COINS,
            sui_bcs.SplitCoin(ref(split.coin), [ref(split.amount)]),
        )
        for split in descriptor.splits
    ]
    target = descriptor.target
    commands.append(
        variant(
            sui_bcs.Command,
            _COMMAND_MOVE_CALL,
            sui_bcs.ProgrammableMoveCall(
                address_tag(target.package),
                target.module,
                target.function,
                [to_type_tag(parse_type_tag(t)) for t in descriptor.type_arguments],
                [ref(a) for a in descriptor.arguments],
            ),
        )
    )

    return variant(
        sui_bcs.TransactionKind,
        _TRANSACTION_KIND_PROGRAMMABLE,
        sui_bcs.ProgrammableTransaction(call_args, commands),
    )


def encode_transaction_kind(
    descriptor: CallDescriptor, object_args: Mapping[str, sui_bcs.ObjectArg]
) -> bytes:
    """BCS bytes of ``build_transaction_kind``, as dev-inspect expects them."""
    return build_transaction_kind(descriptor, object_args).serialize()
