"""
Definition of conditional orders, trading parameters, prices, orders and the calls
that make up a settlement simulation.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Any, Union

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from eth_utils import keccak, to_checksum_address

from contracts.cowamm_constantproduct import cowamm_constantproduct
from contracts.cowamm_pool import cowamm_pool
from cow_amm.abi import encode_call
from cow_amm.constants import EMPTY_COMMITMENT
from cow_amm.errors import DecodeError

CONDITIONAL_ORDER_PARAMS_TYPE = "(address,bytes32,bytes)"
LEGACY_TRADING_PARAMS_TYPE = "(address,address,uint256,address,bytes,bytes32)"
ONCHAIN_ORDER_TYPE = (
    "(address,address,address,uint256,uint256,uint32,bytes32,uint256,"
    "bytes32,bool,bytes32,bytes32)"
)
INTERACTION_TYPE = "(address,uint256,bytes)"


@dataclass(frozen=True)
class ConditionalOrderParams:
    """
    Parameters of a conditional order as registered on ComposableCoW.
    """

    handler: str
    salt: bytes
    static_input: bytes

    def abi_encode(self) -> bytes:
        """ABI encoding of the params struct, as used by ComposableCoW."""
        return encode(
            [CONDITIONAL_ORDER_PARAMS_TYPE],
            [(self.handler, self.salt, self.static_input)],
        )

    def order_hash(self) -> bytes:
        """Key of the order in `ComposableCoW.singleOrders`."""
        return keccak(self.abi_encode())

    @classmethod
    def abi_decode(cls, data: bytes) -> ConditionalOrderParams:
        """Decode an ABI encoded params struct."""
        try:
            (fields,) = decode([CONDITIONAL_ORDER_PARAMS_TYPE], data)
        except DecodingError as err:
            raise DecodeError(f"Invalid conditional order params: {err}") from err
        handler, salt, static_input = fields
        return cls(to_checksum_address(handler), salt, static_input)


@dataclass(frozen=True)
class ConditionalOrderRegistration:
    """A `ConditionalOrderCreated` event."""

    owner: str
    params: ConditionalOrderParams
    block_number: int


@dataclass(frozen=True)
class LegacyTradingParams:
    """
    Static input of the legacy constant product handler.
    """

    token0: str
    token1: str
    min_traded_token0: int
    price_oracle: str
    price_oracle_data: bytes
    app_data: bytes

    @classmethod
    def abi_decode(cls, data: bytes) -> LegacyTradingParams:
        """Decode the static input of a legacy conditional order."""
        try:
            (fields,) = decode([LEGACY_TRADING_PARAMS_TYPE], data)
        except DecodingError as err:
            raise DecodeError(f"Invalid legacy trading params: {err}") from err
        token0, token1, min_traded_token0, price_oracle, oracle_data, app_data = fields
        return cls(
            to_checksum_address(token0),
            to_checksum_address(token1),
            min_traded_token0,
            to_checksum_address(price_oracle),
            oracle_data,
            app_data,
        )

    @property
    def tokens(self) -> tuple[str, str]:
        return self.token0, self.token1


@dataclass(frozen=True)
class CommitmentExpectation:
    """Value the commitment read must return after the simulated settlement."""

    expected: bytes
    mismatch_reason: str


@dataclass(frozen=True)
class LegacyParameters:
    """
    AMM created through the legacy handler. The commitment is stored on the handler
    and must be reset once the settlement is done.
    """

    handler: str
    trading_params: LegacyTradingParams

    def commitment_call(self, amm: str) -> Call:
        return Call(
            self.handler, encode_call(cowamm_constantproduct, "commitment", [amm])
        )

    def expected_commitment(self, order_digest: bytes) -> CommitmentExpectation:
        # pylint: disable=unused-argument
        return CommitmentExpectation(EMPTY_COMMITMENT, "commitment not reset")


@dataclass(frozen=True)
class CurrentParameters:
    """
    AMM with the current layout. Nothing is stored on-chain that allows to derive a
    price, and the commitment lives in transient storage of the AMM itself.
    """

    def commitment_call(self, amm: str) -> Call:
        return Call(amm, encode_call(cowamm_pool, "commitment", []))

    def expected_commitment(self, order_digest: bytes) -> CommitmentExpectation:
        return CommitmentExpectation(order_digest, "commitment unexpectedly reset")


TradingParameters = Union[LegacyParameters, CurrentParameters]


@dataclass(frozen=True)
class Price:
    """
    Relative price of token0 and token1. Numerator and denominator are always passed
    on as a pair.
    """

    numerator: int
    denominator: int

    def as_list(self) -> list[int]:
        return [self.numerator, self.denominator]

    def as_fraction(self) -> Fraction:
        """Only for display, the helper consumes the raw pair."""
        return Fraction(self.numerator, self.denominator)

    def __str__(self) -> str:
        return f"{self.numerator} / {self.denominator}"


@dataclass(frozen=True)
class Interaction:
    """GPv2 interaction."""

    target: str
    value: int
    call_data: bytes

    @classmethod
    def from_tuple(cls, data: tuple[Any, ...]) -> Interaction:
        target, value, call_data = data
        return cls(to_checksum_address(target), value, call_data)


@dataclass(frozen=True)
class OnchainOrder:
    """
    GPv2 order as used on-chain, with `kind` and the balance locations given as
    hashes of their canonical strings.
    """

    sell_token: str
    buy_token: str
    receiver: str
    sell_amount: int
    buy_amount: int
    valid_to: int
    app_data: bytes
    fee_amount: int
    kind: bytes
    partially_fillable: bool
    sell_token_balance: bytes
    buy_token_balance: bytes

    def as_tuple(self) -> tuple[Any, ...]:
        return (
            self.sell_token,
            self.buy_token,
            self.receiver,
            self.sell_amount,
            self.buy_amount,
            self.valid_to,
            self.app_data,
            self.fee_amount,
            self.kind,
            self.partially_fillable,
            self.sell_token_balance,
            self.buy_token_balance,
        )

    @classmethod
    def from_tuple(cls, data: tuple[Any, ...]) -> OnchainOrder:
        fields = list(data)
        for i in range(3):
            fields[i] = to_checksum_address(fields[i])
        return cls(*fields)


@dataclass(frozen=True)
class Order:
    """
    GPv2 order as signed off-chain, with `kind` and the balance locations as strings.
    """

    sell_token: str
    buy_token: str
    receiver: str
    sell_amount: int
    buy_amount: int
    valid_to: int
    app_data: bytes
    fee_amount: int
    kind: str
    partially_fillable: bool
    sell_token_balance: str
    buy_token_balance: str


@dataclass(frozen=True)
class OrderHint:
    """Order, interactions and signature returned by the helper."""

    order: OnchainOrder
    pre_interactions: list[Interaction]
    post_interactions: list[Interaction]
    signature: bytes


@dataclass(frozen=True)
class Call:
    """Multicall3 call."""

    target: str
    call_data: bytes

    def as_tuple(self) -> tuple[str, bytes]:
        return self.target, self.call_data


@dataclass(frozen=True)
class CallResult:
    """Multicall3 result."""

    success: bool
    return_data: bytes


@dataclass
class SimulationBatch:
    """
    Calls in the order the settlement contract would execute them:
    pre-interactions, signature check, post-interactions, commitment read.
    """

    calls: list[Call] = field(default_factory=list)
    num_pre: int = 0
    num_post: int = 0
    has_commitment_read: bool = False

    @property
    def signature_index(self) -> int:
        return self.num_pre

    @property
    def commitment_index(self) -> int:
        return self.num_pre + 1 + self.num_post
