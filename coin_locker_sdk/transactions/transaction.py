"""Unsigned programmable transaction blocks.

A :class:`Transaction` records inputs and commands without touching the
network. Object inputs are kept by id only. :meth:`Transaction.build_kind`
and :meth:`Transaction.build` resolve them against a chain client (owned
objects to an object reference, shared objects to their initial shared
version) and hand the block to pysui's ``ProgrammableTransactionBuilder``
for BCS serialization.
"""
from __future__ import annotations

import base64
import json
import logging
from dataclasses import dataclass
from typing import Any, Sequence, Union

import pysui.sui.sui_txn.transaction_builder as tx_builder
from pysui.sui.sui_types import bcs
from pysui.sui.sui_types.address import SuiAddress

from ..constants import SUI_COIN_TYPE
from ..errors import TransactionBuildError, ValidationError
from ..interfaces.chain import ChainClient
from .type_tags import normalize_address

logger = logging.getLogger(__name__)

MAX_GAS_COINS = 256
GAS_COIN_PAGE_SIZE = 50
MAX_U64 = 2**64 - 1

# ---------------------------------------------------------------------------
# Arguments, inputs and commands
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Argument:
    """Reference to a transaction input or to a previous command's result."""

    kind: str  # "GasCoin" | "Input" | "Result"
    index: int = 0

    def to_dict(self) -> Any:
        if self.kind == "GasCoin":
            return "GasCoin"
        return {self.kind: self.index}


GAS_COIN = Argument("GasCoin")


@dataclass(frozen=True)
class PureInput:
    type: str  # "u64" | "bool" | "address"
    value: Any

    def to_dict(self) -> dict[str, Any]:
        value = self.value
        if isinstance(value, int) and not isinstance(value, bool):
            value = str(value)
        return {"Pure": {"type": self.type, "value": value}}


@dataclass(frozen=True)
class ObjectInput:
    object_id: str
    mutable: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {"Object": {"objectId": self.object_id, "mutable": self.mutable}}


@dataclass(frozen=True)
class MoveCall:
    package: str
    module: str
    function: str
    type_arguments: tuple[str, ...] = ()
    arguments: tuple[Argument, ...] = ()

    @property
    def target(self) -> str:
        return f"{self.package}::{self.module}::{self.function}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "MoveCall": {
                "target": self.target,
                "typeArguments": list(self.type_arguments),
                "arguments": [a.to_dict() for a in self.arguments],
            }
        }


@dataclass(frozen=True)
class TransferObjects:
    objects: tuple[Argument, ...]
    recipient: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "TransferObjects": {
                "objects": [a.to_dict() for a in self.objects],
                "recipient": self.recipient,
            }
        }


@dataclass(frozen=True)
class SplitCoin:
    coin: Argument
    amount: int

    def to_dict(self) -> dict[str, Any]:
        return {"SplitCoin": {"coin": self.coin.to_dict(), "amount": str(self.amount)}}


@dataclass(frozen=True)
class MergeCoins:
    destination: Argument
    sources: tuple[Argument, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "MergeCoins": {
                "destination": self.destination.to_dict(),
                "sources": [a.to_dict() for a in self.sources],
            }
        }


Command = Union[MoveCall, TransferObjects, SplitCoin, MergeCoins]
Input = Union[PureInput, ObjectInput]


def parse_target(target: str) -> tuple[str, str, str]:
    """Split ``package::module::function`` into its parts."""
    parts = target.split("::")
    if len(parts) != 3 or not all(parts):
        raise ValidationError(f"Invalid move call target: {target!r}")
    return normalize_address(parts[0]), parts[1], parts[2]


def _check_u64(value: int) -> int:
    if isinstance(value, bool) or not 0 <= value <= MAX_U64:
        raise TransactionBuildError(f"Value {value!r} does not fit in u64")
    return value


# ---------------------------------------------------------------------------
# pysui conversion
# ---------------------------------------------------------------------------


def object_reference(
    object_id: str, version: int | str, digest: str
) -> bcs.ObjectReference:
    try:
        return bcs.ObjectReference(
            bcs.Address.from_str(normalize_address(object_id)),
            int(version),
            bcs.Digest.from_str(digest),
        )
    except (TypeError, ValueError) as e:
        raise TransactionBuildError(
            f"Invalid object reference for {object_id}: {e}"
        ) from e


def _pure_arg(inp: PureInput) -> bcs.BuilderArg:
    if inp.type == "address":
        return tx_builder.PureInput.as_input(SuiAddress(inp.value))
    if inp.type == "bool":
        return tx_builder.PureInput.as_input(bool(inp.value))
    return tx_builder.PureInput.as_input(int(inp.value))


def _object_arg(inp: ObjectInput, data: dict[str, Any]) -> bcs.ObjectArg:
    owner = data.get("owner")
    if isinstance(owner, dict) and "Shared" in owner:
        return bcs.ObjectArg(
            "SharedObject",
            bcs.SharedObjectReference(
                bcs.Address.from_str(inp.object_id),
                int(owner["Shared"]["initial_shared_version"]),
                inp.mutable,
            ),
        )
    return bcs.ObjectArg(
        "ImmOrOwnedObject",
        object_reference(inp.object_id, data["version"], data["digest"]),
    )


# ---------------------------------------------------------------------------
# Transaction
# ---------------------------------------------------------------------------


class Transaction:
    """Mutable builder for one programmable transaction block."""

    def __init__(self) -> None:
        self._inputs: list[Input] = []
        self._commands: list[Command] = []
        self._object_inputs: dict[str, int] = {}

    @property
    def inputs(self) -> tuple[Input, ...]:
        return tuple(self._inputs)

    @property
    def commands(self) -> tuple[Command, ...]:
        return tuple(self._commands)

    @property
    def gas(self) -> Argument:
        return GAS_COIN

    # -- inputs ---------------------------------------------------------

    def object(self, object_id: str, mutable: bool = True) -> Argument:
        """Add (or reuse) an object input by id."""
        object_id = normalize_address(object_id)
        index = self._object_inputs.get(object_id)
        if index is not None:
            existing = self._inputs[index]
            if mutable and isinstance(existing, ObjectInput) and not existing.mutable:
                self._inputs[index] = ObjectInput(object_id, mutable=True)
            return Argument("Input", index)

        self._inputs.append(ObjectInput(object_id, mutable))
        index = len(self._inputs) - 1
        self._object_inputs[object_id] = index
        return Argument("Input", index)

    def _pure(self, type_: str, value: Any) -> Argument:
        self._inputs.append(PureInput(type_, value))
        return Argument("Input", len(self._inputs) - 1)

    def pure_u64(self, value: int | str) -> Argument:
        return self._pure("u64", _check_u64(int(value)))

    def pure_bool(self, value: bool) -> Argument:
        return self._pure("bool", bool(value))

    def pure_address(self, value: str) -> Argument:
        return self._pure("address", normalize_address(value))

    # -- commands -------------------------------------------------------

    def _add(self, command: Command) -> Argument:
        self._commands.append(command)
        return Argument("Result", len(self._commands) - 1)

    def move_call(
        self,
        target: str,
        arguments: Sequence[Argument] = (),
        type_arguments: Sequence[str] = (),
    ) -> Argument:
        package, module, function = parse_target(target)
        return self._add(
            MoveCall(
                package=package,
                module=module,
                function=function,
                type_arguments=tuple(type_arguments),
                arguments=tuple(arguments),
            )
        )

    def split_coin(self, coin: Argument, amount: int | str) -> Argument:
        """Split ``amount`` off ``coin``; the result is the new coin."""
        return self._add(SplitCoin(coin, _check_u64(int(amount))))

    def merge_coins(self, destination: Argument, sources: Sequence[Argument]) -> None:
        if sources:
            self._add(MergeCoins(destination, tuple(sources)))

    def transfer_objects(self, objects: Sequence[Argument], recipient: str) -> None:
        self._add(TransferObjects(tuple(objects), normalize_address(recipient)))

    # -- serialization --------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": 1,
            "inputs": [i.to_dict() for i in self._inputs],
            "commands": [c.to_dict() for c in self._commands],
        }

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    async def _resolve_objects(self, client: ChainClient) -> dict[str, dict[str, Any]]:
        ids = [i.object_id for i in self._inputs if isinstance(i, ObjectInput)]
        if not ids:
            return {}

        responses = await client.multi_get_objects(ids, {"showOwner": True})
        resolved: dict[str, dict[str, Any]] = {}
        for object_id, response in zip(ids, responses):
            data = (response or {}).get("data")
            if not data:
                raise TransactionBuildError(
                    f"Object {object_id} not found: {(response or {}).get('error')}"
                )
            resolved[object_id] = data
        return resolved

    def _builder(
        self, resolved: dict[str, dict[str, Any]]
    ) -> tx_builder.ProgrammableTransactionBuilder:
        builder = tx_builder.ProgrammableTransactionBuilder()

        inputs: list[bcs.Argument] = []
        for inp in self._inputs:
            if isinstance(inp, PureInput):
                inputs.append(builder.input_pure(_pure_arg(inp)))
            else:
                inputs.append(
                    builder.input_obj(
                        bcs.BuilderArg("Object", bcs.Address.from_str(inp.object_id)),
                        _object_arg(inp, resolved[inp.object_id]),
                    )
                )

        results: list[bcs.Argument] = []

        def arg(a: Argument) -> bcs.Argument:
            if a.kind == "GasCoin":
                return bcs.Argument("GasCoin")
            if a.kind == "Input":
                return inputs[a.index]
            if a.kind == "Result":
                return results[a.index]
            raise TransactionBuildError(f"Unknown argument kind {a.kind!r}")

        for command in self._commands:
            if isinstance(command, MoveCall):
                result = builder.move_call(
                    target=bcs.Address.from_str(command.package),
                    arguments=[arg(a) for a in command.arguments],
                    type_arguments=[
                        bcs.TypeTag.type_tag_from(t) for t in command.type_arguments
                    ],
                    module=command.module,
                    function=command.function,
                )
            elif isinstance(command, SplitCoin):
                result = builder.split_coin(
                    arg(command.coin), [tx_builder.PureInput.as_input(command.amount)]
                )
            elif isinstance(command, MergeCoins):
                result = builder.merge_coins(
                    arg(command.destination), [arg(a) for a in command.sources]
                )
            else:
                result = builder.transfer_objects(
                    tx_builder.PureInput.as_input(SuiAddress(command.recipient)),
                    [arg(a) for a in command.objects],
                )
            results.append(result)
        return builder

    async def build_kind(self, client: ChainClient) -> bytes:
        """Serialize as a BCS ``TransactionKind`` (the dev-inspect payload)."""
        resolved = await self._resolve_objects(client)
        return self._builder(resolved).finish_for_inspect().serialize()

    async def _select_gas(
        self, client: ChainClient, owner: str, budget: int
    ) -> list[bcs.ObjectReference]:
        """Pick SUI coins not used as inputs until ``budget`` is covered."""
        payment: list[bcs.ObjectReference] = []
        total = 0
        cursor = None

        while True:
            page = await client.get_coins(owner, SUI_COIN_TYPE, cursor, GAS_COIN_PAGE_SIZE)
            for coin in page.get("data", []):
                coin_id = normalize_address(coin["coinObjectId"])
                if coin_id in self._object_inputs:
                    continue
                payment.append(object_reference(coin_id, coin["version"], coin["digest"]))
                total += int(coin.get("balance", 0))
                if total >= budget or len(payment) >= MAX_GAS_COINS:
                    break

            if total >= budget or len(payment) >= MAX_GAS_COINS:
                break
            cursor = page.get("nextCursor")
            if not page.get("hasNextPage") or not cursor:
                break

        if total < budget:
            raise TransactionBuildError(
                f"Insufficient SUI for gas: have {total}, need {budget}"
            )
        return payment

    async def build(
        self,
        client: ChainClient,
        sender: str,
        gas_budget: int,
        gas_price: int | None = None,
    ) -> bytes:
        """Serialize as a BCS ``TransactionData::V1`` ready to be signed."""
        sender = normalize_address(sender)
        resolved = await self._resolve_objects(client)
        kind = self._builder(resolved).finish_for_inspect()
        if gas_price is None:
            gas_price = await client.get_reference_gas_price()
        payment = await self._select_gas(client, sender, gas_budget)
        logger.debug(
            "Building transaction: %d inputs, %d commands, %d gas coins, price %d",
            len(self._inputs), len(self._commands), len(payment), gas_price,
        )

        owner = bcs.Address.from_str(sender)
        data = bcs.TransactionData(
            "V1",
            bcs.TransactionDataV1(
                kind,
                owner,
                bcs.GasData(payment, owner, gas_price, gas_budget),
                bcs.TransactionExpiration("None"),
            ),
        )
        return data.serialize()


def to_base64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")
