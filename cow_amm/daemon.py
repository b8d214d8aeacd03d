""" A daemon to verify CoW AMMs.
All open AMMs are discovered and verified once. Then an infinite loop follows the chain
head; every AMM (re-)registered in a new block is verified once.

If an AMM fails verification, an error level message is logged.
"""
# pylint: disable=logging-fstring-interpolation

import logging
import sys
import time
from typing import Optional

from cow_amm.apis.helperapi import HelperAPI
from cow_amm.apis.web3api import Web3API
from cow_amm.configuration import get_helper_bytecode, get_price_override
from cow_amm.constants import SLEEP_TIME_IN_SEC
from cow_amm.discovery import Discoverer
from cow_amm.errors import ConfigurationError
from cow_amm.helper_functions import get_logger
from cow_amm.verifier.hint_verification import HintVerificationCheck


def verify_amms(
    check: HintVerificationCheck, amms: list[str], logger: logging.Logger
) -> None:
    """
    Verify every AMM once. An AMM that cannot be verified is reported and skipped, the
    daemon keeps running.
    """
    for amm in amms:
        try:
            check.run(amm)
        except ConfigurationError as err:
            logger.error(f"AMM {amm} skipped: {err}")
        except Exception as err:  # pylint: disable=W0718
            logger.warning(
                f"Verification of AMM {amm} failed unexpectedly. "
                f"Error of type {type(err)}: {err}"
            )


def main() -> None:
    """
    daemon function that runs as highlighted in docstring.
    """
    logger = get_logger()
    try:
        web3_api = Web3API()
        network = web3_api.get_network()
        check = HintVerificationCheck(
            web3_api,
            HelperAPI(web3_api, get_helper_bytecode()),
            get_price_override(),
        )
    except ConfigurationError as err:
        logger.error(str(err))
        sys.exit(1)

    discoverer = Discoverer(web3_api, network)
    try:
        amms = discoverer.filter_open(discoverer.scan())
    except Exception as err:  # pylint: disable=W0718
        logger.warning(f"Initial scan failed: {err}")
        amms = {}
    logger.info(f"{len(amms)} open AMMs found on {network.name}")
    verify_amms(check, list(amms), logger)

    logger.debug("Start infinite loop")
    while True:
        time.sleep(SLEEP_TIME_IN_SEC)
        start_block: Optional[int] = None
        if discoverer.last_scanned_block is not None:
            start_block = discoverer.last_scanned_block + 1
        try:
            new_amms = discoverer.filter_open(discoverer.scan(start_block))
        except Exception as err:  # pylint: disable=W0718
            logger.warning(f"Error while scanning for new AMMs: {err}")
            continue
        if not new_amms:
            continue

        logger.debug(f"{len(new_amms)} new AMMs found: {list(new_amms)}")
        verify_amms(check, list(new_amms), logger)


if __name__ == "__main__":
    main()
