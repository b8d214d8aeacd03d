"""
Web3API for fetching relevant data using the web3 library.
"""

# pylint: disable=logging-fstring-interpolation

from typing import Any, Optional

from eth_typing import ChecksumAddress, HexStr
from hexbytes import HexBytes
from web3 import Web3
from web3.exceptions import ContractLogicError
from web3.types import FilterParams, LogReceipt, StateOverride

from contracts.composable_cow import composable_cow
from contracts.erc20 import erc20
from contracts.gpv2_settlement import gpv2_settlement
from contracts.price_oracle import price_oracle
from cow_amm.abi import decode_revert_reason
from cow_amm.configuration import NetworkConfig, get_network_config, get_node_url
from cow_amm.constants import (
    COMPOSABLE_COW_ADDRESS,
    REQUEST_TIMEOUT,
    SETTLEMENT_CONTRACT_ADDRESS,
)
from cow_amm.errors import SimulationReverted
from cow_amm.helper_functions import get_logger
from cow_amm.models import Price


def revert_data(err: ContractLogicError) -> bytes:
    """Raw revert payload attached to a web3 contract error, empty if there is none."""
    data = err.data
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    if isinstance(data, str) and data.startswith("0x"):
        try:
            return bytes(HexBytes(data))
        except ValueError:
            return b""
    return b""


def revert_message(err: ContractLogicError) -> str:
    """Message of a web3 contract error without the attached payload."""
    return err.message or str(err)


class Web3API:
    """
    Class for fetching data from a Web3 API.
    """

    def __init__(self, url: Optional[str] = None) -> None:
        self.url = url if url is not None else get_node_url()
        self.web_3 = Web3(
            Web3.HTTPProvider(self.url, request_kwargs={"timeout": REQUEST_TIMEOUT})
        )
        self.composable_cow = self.web_3.eth.contract(
            address=self.checksum(COMPOSABLE_COW_ADDRESS), abi=composable_cow
        )
        self.settlement = self.web_3.eth.contract(
            address=self.checksum(SETTLEMENT_CONTRACT_ADDRESS), abi=gpv2_settlement
        )
        self.logger = get_logger()

    @staticmethod
    def checksum(address: str) -> ChecksumAddress:
        return Web3.to_checksum_address(address)

    def get_chain_id(self) -> int:
        return int(self.web_3.eth.chain_id)

    def get_network(self) -> NetworkConfig:
        """
        Network constants of the connected chain. Raises ConfigurationError if the chain
        is not supported.
        """
        return get_network_config(self.get_chain_id())

    def get_current_block_number(self) -> int:
        """
        Function that returns the current block number
        """
        return int(self.web_3.eth.block_number)

    def get_logs(
        self, start_block: int, end_block: int, topics: list[Any]
    ) -> list[LogReceipt]:
        """
        Function fetches logs matching the topics within a block range
        """
        if start_block > end_block:
            return []
        filter_criteria: FilterParams = {
            "fromBlock": int(start_block),
            "toBlock": int(end_block),
            "topics": topics,
        }
        return list(self.web_3.eth.get_logs(filter_criteria))

    def call(
        self,
        target: str,
        data: bytes,
        state_override: Optional[StateOverride] = None,
    ) -> bytes:
        """
        Untyped eth_call. Reverts are raised as web3 ContractLogicError with the revert
        payload attached.
        """
        transaction = {"to": self.checksum(target), "data": HexStr("0x" + data.hex())}
        return bytes(self.web_3.eth.call(transaction, "latest", state_override))

    def is_single_order_enabled(self, owner: str, order_hash: bytes) -> bool:
        """
        Check on ComposableCoW that the conditional order with the given hash is still
        authorized by its owner.
        """
        return bool(
            self.composable_cow.functions.singleOrders(
                self.checksum(owner), order_hash
            ).call()
        )

    def get_token_balance(self, token: str, owner: str) -> int:
        """
        ERC20 balance of owner.
        """
        contract = self.web_3.eth.contract(address=self.checksum(token), abi=erc20)
        return int(contract.functions.balanceOf(self.checksum(owner)).call())

    def get_oracle_price(
        self, oracle: str, token0: str, token1: str, oracle_data: bytes
    ) -> Price:
        """
        Query a price oracle of a legacy AMM. The returned pair is kept as is.
        """
        contract = self.web_3.eth.contract(
            address=self.checksum(oracle), abi=price_oracle
        )
        numerator, denominator = contract.functions.getPrice(
            self.checksum(token0), self.checksum(token1), oracle_data
        ).call()
        return Price(int(numerator), int(denominator))

    def simulate_delegatecall(self, target: str, payload: bytes) -> bytes:
        """
        Run `payload` as a delegatecall from the settlement contract to `target` without
        changing state. A revert of the simulation raises SimulationReverted with the
        decoded reason.
        """
        try:
            response = self.settlement.functions.simulateDelegatecall(
                self.checksum(target), payload
            ).call()
        except ContractLogicError as err:
            data = revert_data(err)
            reason = (
                decode_revert_reason(data)
                or (("0x" + data.hex()) if data else revert_message(err))
            )
            raise SimulationReverted(reason) from err
        return bytes(response)

    def get_domain_separator(self) -> bytes:
        """
        Domain separator as reported by the settlement contract.
        """
        return bytes(self.settlement.functions.domainSeparator().call())
