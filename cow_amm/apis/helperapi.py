"""
HelperAPI for calling the ConstantProductHelper. The helper is not deployed, its code is
injected at a fixed address with a state override on every call.
"""

# pylint: disable=logging-fstring-interpolation

from web3.exceptions import ContractLogicError
from web3.types import StateOverride

from contracts.constant_product_helper import constant_product_helper
from cow_amm.abi import (
    decode_result,
    decode_revert_reason,
    encode_call,
    get_abi_entry,
    selector,
)
from cow_amm.apis.web3api import Web3API, revert_data, revert_message
from cow_amm.constants import HELPER_ADDRESS
from cow_amm.errors import HelperRevert, RevertKind
from cow_amm.helper_functions import get_logger
from cow_amm.models import (
    ConditionalOrderParams,
    CurrentParameters,
    Interaction,
    LegacyParameters,
    LegacyTradingParams,
    OnchainOrder,
    OrderHint,
    Price,
    TradingParameters,
)

POOL_DOES_NOT_EXIST = selector(
    get_abi_entry(constant_product_helper, "PoolDoesNotExist", "error")
)
POOL_IS_CLOSED = selector(
    get_abi_entry(constant_product_helper, "PoolIsClosed", "error")
)


def classify_helper_revert(data: bytes, fallback: str = "") -> HelperRevert:
    """
    Map the revert payload of the helper to one of the known failure kinds. Payloads
    that are neither a known helper error nor a standard revert reason are kept raw.
    """
    if data[:4] == POOL_DOES_NOT_EXIST:
        return HelperRevert(RevertKind.POOL_DOES_NOT_EXIST)
    if data[:4] == POOL_IS_CLOSED:
        return HelperRevert(RevertKind.POOL_IS_CLOSED)
    reason = decode_revert_reason(data)
    if reason is not None:
        return HelperRevert(RevertKind.REVERT_REASON, reason)
    return HelperRevert(RevertKind.RAW, "0x" + data.hex() if data else fallback)


def parse_snapshot(snapshot: bytes) -> TradingParameters:
    """
    An empty snapshot belongs to an AMM with the current layout. Otherwise the snapshot
    holds the conditional order params of a legacy AMM.
    """
    if len(snapshot) == 0:
        return CurrentParameters()
    params = ConditionalOrderParams.abi_decode(snapshot)
    return LegacyParameters(
        params.handler, LegacyTradingParams.abi_decode(params.static_input)
    )


def parse_order_hint(data: bytes) -> OrderHint:
    """Decode the return data of `order`."""
    order, pre_interactions, post_interactions, signature = decode_result(
        constant_product_helper, "order", data
    )
    return OrderHint(
        OnchainOrder.from_tuple(order),
        [Interaction.from_tuple(interaction) for interaction in pre_interactions],
        [Interaction.from_tuple(interaction) for interaction in post_interactions],
        bytes(signature),
    )


class HelperAPI:
    """
    Class for reading snapshots and order hints from the ConstantProductHelper.
    """

    def __init__(self, web3_api: Web3API, bytecode: str) -> None:
        self.web3_api = web3_api
        self.address = web3_api.checksum(HELPER_ADDRESS)
        self.overrides: StateOverride = {self.address: {"code": bytecode}}
        self.logger = get_logger()

    def get_snapshot(self, amm: str) -> TradingParameters:
        """
        Read the parameter snapshot of an AMM and classify its layout.
        """
        try:
            data = self.web3_api.call(
                self.address,
                encode_call(constant_product_helper, "getSnapshot", [amm]),
                self.overrides,
            )
        except ContractLogicError as err:
            raise classify_helper_revert(revert_data(err), revert_message(err)) from err
        (snapshot,) = decode_result(constant_product_helper, "getSnapshot", data)
        return parse_snapshot(bytes(snapshot))

    def get_order_hint(self, amm: str, price: Price) -> OrderHint:
        """
        Ask the helper for the order the AMM would trade at the given price. A revert is
        raised as HelperRevert with the decoded failure kind.
        """
        try:
            data = self.web3_api.call(
                self.address,
                encode_call(constant_product_helper, "order", [amm, price.as_list()]),
                self.overrides,
            )
        except ContractLogicError as err:
            raise classify_helper_revert(revert_data(err), revert_message(err)) from err
        return parse_order_hint(data)
