"""
Discovery of constant product AMMs from the `ConditionalOrderCreated` events of
ComposableCoW.
"""

# pylint: disable=logging-fstring-interpolation

from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Optional

from eth_utils import encode_hex, event_abi_to_log_topic, to_checksum_address

from contracts.composable_cow import composable_cow
from cow_amm.abi import get_abi_entry
from cow_amm.apis.web3api import Web3API
from cow_amm.configuration import NetworkConfig
from cow_amm.constants import LIVENESS_MAX_WORKERS, WINDOW_SIZE
from cow_amm.errors import DecodeError
from cow_amm.helper_functions import get_logger
from cow_amm.models import (
    ConditionalOrderParams,
    ConditionalOrderRegistration,
    LegacyTradingParams,
)

CONDITIONAL_ORDER_CREATED_TOPIC = encode_hex(
    event_abi_to_log_topic(
        get_abi_entry(composable_cow, "ConditionalOrderCreated", "event")
    )
)


def decode_registration(log: Any) -> ConditionalOrderRegistration:
    """
    Decode a `ConditionalOrderCreated` log. The owner is the only indexed argument.
    """
    topics = log["topics"]
    if len(topics) != 2:
        raise DecodeError(f"Unexpected topics for ConditionalOrderCreated: {topics}")
    owner = to_checksum_address(bytes(topics[1])[-20:])
    params = ConditionalOrderParams.abi_decode(bytes(log["data"]))
    return ConditionalOrderRegistration(owner, params, int(log["blockNumber"]))


def format_registration(registration: ConditionalOrderRegistration) -> str:
    """`<address>,<ABI encoded params>` line of the discovery output."""
    return f"{registration.owner},{registration.params.abi_encode().hex()}"


class Discoverer:
    """
    Scans the chain for AMMs registered with the constant product handler of the
    network.
    """

    def __init__(
        self,
        web3_api: Web3API,
        network: NetworkConfig,
        window_size: int = WINDOW_SIZE,
        max_workers: int = LIVENESS_MAX_WORKERS,
    ) -> None:
        self.web3_api = web3_api
        self.network = network
        self.window_size = window_size
        self.max_workers = max_workers
        self.last_scanned_block: Optional[int] = None
        self.logger = get_logger()

    def scan(
        self, from_block: Optional[int] = None
    ) -> dict[str, ConditionalOrderRegistration]:
        """
        Collect the latest registration per owner, from `from_block` (default: the
        deployment of the handler) up to the chain head.

        The head is read again after every window. The scan stops once the head is not
        past the end of the last window; otherwise it continues with the next window.
        Later registrations of an owner overwrite earlier ones.
        """
        start_block = (
            self.network.genesis_block if from_block is None else int(from_block)
        )
        latest_block = self.web3_api.get_current_block_number()
        amms: dict[str, ConditionalOrderRegistration] = {}
        if start_block > latest_block:
            return amms

        while True:
            end_block = start_block + min(
                self.window_size - 1, latest_block - start_block
            )
            self.logger.info(f"Processing blocks: {start_block} - {end_block}")
            logs = self.web3_api.get_logs(
                start_block, end_block, [CONDITIONAL_ORDER_CREATED_TOPIC]
            )
            for log in logs:
                try:
                    registration = decode_registration(log)
                except DecodeError as err:
                    self.logger.warning(f"Skipping undecodable log: {err}")
                    continue
                if registration.params.handler != self.network.constant_product_handler:
                    continue
                amms[registration.owner] = registration
            self.last_scanned_block = end_block

            latest_block = self.web3_api.get_current_block_number()
            if latest_block <= end_block:
                break
            start_block = end_block + 1

        return amms

    def is_open(self, registration: ConditionalOrderRegistration) -> bool:
        """
        An AMM is open if its conditional order is still enabled on ComposableCoW and it
        holds a non-zero balance of both tokens.
        """
        owner = registration.owner
        if not self.web3_api.is_single_order_enabled(
            owner, registration.params.order_hash()
        ):
            self.logger.debug(f"AMM {owner} is no longer enabled")
            return False

        trading_params = LegacyTradingParams.abi_decode(
            registration.params.static_input
        )
        for token in trading_params.tokens:
            if self.web3_api.get_token_balance(token, owner) == 0:
                self.logger.debug(f"AMM {owner} holds no {token}")
                return False
        return True

    def _is_open_isolated(self, registration: ConditionalOrderRegistration) -> bool:
        try:
            return self.is_open(registration)
        except Exception as err:  # pylint: disable=W0718
            self.logger.warning(
                f"Liveness check for AMM {registration.owner} failed, skipping it. "
                f"Error of type {type(err)}: {err}"
            )
            return False

    def filter_open(
        self, registrations: dict[str, ConditionalOrderRegistration]
    ) -> dict[str, ConditionalOrderRegistration]:
        """
        Keep the AMMs that are still open. Checks run concurrently, a failing check
        removes only the AMM it belongs to.
        """
        if not registrations:
            return {}
        candidates = list(registrations.values())
        with ThreadPoolExecutor(
            max_workers=min(self.max_workers, len(candidates))
        ) as executor:
            open_flags = list(executor.map(self._is_open_isolated, candidates))
        return {
            registration.owner: registration
            for registration, is_open in zip(candidates, open_flags)
            if is_open
        }
