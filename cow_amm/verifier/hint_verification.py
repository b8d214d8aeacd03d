"""
Checks that an AMM currently produces an order hint that can be settled.
"""

# pylint: disable=logging-fstring-interpolation

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import requests
from eth_abi.exceptions import EncodingError
from web3.exceptions import Web3Exception

from cow_amm.apis.helperapi import HelperAPI
from cow_amm.apis.web3api import Web3API
from cow_amm.constants import MULTICALL3_ADDRESS, SETTLEMENT_CONTRACT_ADDRESS
from cow_amm.errors import ConfigurationError, CowAmmError
from cow_amm.helper_functions import shorten
from cow_amm.models import LegacyParameters, Price, TradingParameters
from cow_amm.order import from_onchain, signing_digest, to_onchain
from cow_amm.verifier.base_check import BaseCheck
from cow_amm.verifier.batch import (
    build_simulation_batch,
    decode_try_aggregate,
    encode_try_aggregate,
)
from cow_amm.verifier.report import VerificationReport, check_simulation_results


class VerificationState(Enum):
    """Stages of the verification of one AMM."""

    STARTED = "Started"
    SNAPSHOT_FETCHED = "SnapshotFetched"
    PARAMETERS_RESOLVED = "ParametersResolved"
    PRICE_RESOLVED = "PriceResolved"
    HINT_REQUESTED = "HintRequested"
    BATCH_ASSEMBLED = "BatchAssembled"
    BATCH_SIMULATED = "BatchSimulated"
    VERIFIED = "Verified"
    REJECTED = "Rejected"


@dataclass
class VerificationOutcome:
    """
    Result of verifying one AMM. `stage` is the last stage that completed before the
    AMM was verified or rejected.
    """

    amm: str
    state: VerificationState
    stage: VerificationState
    failures: list[str] = field(default_factory=list)
    report: Optional[VerificationReport] = None

    @property
    def ok(self) -> bool:
        return self.state == VerificationState.VERIFIED


class HintVerificationCheck(BaseCheck):
    """
    Checks that the order hint of an AMM can be settled.

    The parameters of the AMM are read through the ConstantProductHelper, a price is
    taken from the override or the AMM's oracle, and the helper is asked for an order
    hint. The side effects of settling the hint are then replayed in a single
    simulateDelegatecall from the settlement contract into Multicall3: pre-interactions,
    the ERC-1271 signature check, post-interactions and a read of the commitment.
    """

    def __init__(
        self,
        web3_api: Web3API,
        helper_api: HelperAPI,
        price_override: Optional[Price] = None,
    ) -> None:
        super().__init__()
        self.web3_api = web3_api
        self.helper_api = helper_api
        self.price_override = price_override
        self.chain_id = web3_api.get_chain_id()
        self.settlement = web3_api.checksum(SETTLEMENT_CONTRACT_ADDRESS)
        self.multicall = web3_api.checksum(MULTICALL3_ADDRESS)

    def resolve_price(self, amm: str, parameters: TradingParameters) -> Price:
        """
        The override wins. Without one, legacy AMMs are priced by their oracle and AMMs
        with the current layout cannot be priced at all.
        """
        if self.price_override is not None:
            return self.price_override
        if isinstance(parameters, LegacyParameters):
            trading_params = parameters.trading_params
            return self.web3_api.get_oracle_price(
                trading_params.price_oracle,
                trading_params.token0,
                trading_params.token1,
                trading_params.price_oracle_data,
            )
        raise ConfigurationError(
            f"AMM {amm} has no on-chain price oracle, "
            "PRICE_NUMERATOR and PRICE_DENOMINATOR must be set"
        )

    def verify(self, amm: str) -> VerificationOutcome:
        """
        Run the verification pipeline for one AMM. Configuration errors are raised, every
        other failure rejects the AMM.
        """
        stage = VerificationState.STARTED
        try:
            parameters = self.helper_api.get_snapshot(amm)
            stage = VerificationState.SNAPSHOT_FETCHED

            if isinstance(parameters, LegacyParameters):
                self.logger.info(
                    f"Legacy AMM {amm}: handler {parameters.handler}, tokens "
                    f"{parameters.trading_params.token0} / "
                    f"{parameters.trading_params.token1}, "
                    f"oracle {parameters.trading_params.price_oracle}"
                )
            else:
                self.logger.info(f"AMM {amm} uses the current layout")
            stage = VerificationState.PARAMETERS_RESOLVED

            price = self.resolve_price(amm, parameters)
            self.logger.info(f"Price: {price}")
            stage = VerificationState.PRICE_RESOLVED

            hint = self.helper_api.get_order_hint(amm, price)
            self.logger.info(
                f"Hint received: {len(hint.pre_interactions)} pre-interactions, "
                f"{len(hint.post_interactions)} post-interactions, "
                f"signature {shorten(hint.signature)}"
            )
            self.logger.debug(f"Order: {hint.order}")
            stage = VerificationState.HINT_REQUESTED

            order = from_onchain(hint.order)
            digest = signing_digest(to_onchain(order), self.chain_id, self.settlement)
            batch = build_simulation_batch(
                amm, hint, digest, parameters.commitment_call(amm)
            )
            payload = encode_try_aggregate(batch)
            self.logger.debug(f"simulateDelegatecall payload: 0x{payload.hex()}")
            stage = VerificationState.BATCH_ASSEMBLED

            response = self.web3_api.simulate_delegatecall(self.multicall, payload)
            results = decode_try_aggregate(response)
            stage = VerificationState.BATCH_SIMULATED
        except ConfigurationError:
            raise
        except (
            CowAmmError,
            EncodingError,
            Web3Exception,
            requests.RequestException,
        ) as err:
            return VerificationOutcome(
                amm, VerificationState.REJECTED, stage, [str(err)]
            )

        report = check_simulation_results(
            batch.num_pre,
            batch.num_post,
            results,
            parameters.expected_commitment(digest),
        )
        state = VerificationState.VERIFIED if report.ok else VerificationState.REJECTED
        return VerificationOutcome(amm, state, stage, report.failures, report)

    def run(self, amm: str) -> bool:
        """
        Wrapper function for the whole check. Logs success or raises an alert with the
        reasons the AMM was rejected.
        """
        self.logger.info(f"Polling AMM: {amm}")
        outcome = self.verify(amm)

        log_output = "\t".join(
            [
                "CoW AMM hint verification",
                f"AMM: {amm}",
                f"Result: {outcome.state.value}",
                f"Last stage: {outcome.stage.value}",
            ]
            + ([f"Reasons: {'; '.join(outcome.failures)}"] if outcome.failures else [])
        )
        if outcome.ok:
            self.logger.info(log_output)
        else:
            self.alert(log_output)
        return outcome.ok
