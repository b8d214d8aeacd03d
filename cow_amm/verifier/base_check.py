"""
In this file, we introduce the BaseCheck class, whose purpose is to be used as the basis
for all checks run against AMMs.
"""

# pylint: disable=logging-fstring-interpolation

import os
from abc import ABC, abstractmethod
from slack_sdk import WebClient
from cow_amm.helper_functions import get_logger


class BaseCheck(ABC):
    """
    This is a BaseCheck class that contains a few auxiliary functions that
    multiple checks might find useful. The intended usage is that every new check
    is a subclass of this class.
    """

    def __init__(self) -> None:
        self.amms: list[str] = []
        self.logger = get_logger()

        if "SLACK_BOT_TOKEN" in os.environ:
            self.slack_client = WebClient(token=os.environ["SLACK_BOT_TOKEN"])
        else:
            self.slack_client = None

    @abstractmethod
    def run(self, amm: str) -> bool:
        """
        This function runs the check for one AMM. It must be implemented by all subclasses.
        The function returns `True` if the AMM passed the check and `False` otherwise.
        """

    def run_queue(self) -> dict[str, bool]:
        """
        Run the check once for every AMM in the queue and empty the queue. Failed AMMs
        are not retried.
        """
        results = {amm: self.run(amm) for amm in self.amms}
        passed = [amm for amm, success in results.items() if success]
        failed = [amm for amm, success in results.items() if not success]
        self.logger.debug(f"Check passed for {passed} and failed for {failed}.")
        self.amms = []
        return results

    def add_amms_to_queue(self, amms: list[str]) -> None:
        """
        Add a list of AMMs to the queue, skipping AMMs that are already queued.
        """
        for amm in amms:
            if amm not in self.amms:
                self.amms.append(amm)

    def alert(self, msg: str) -> None:
        """
        This function is called to create an alert for a failed check.
        """
        self.logger.error(msg)

        if self.slack_client:
            self.slack_client.chat_postMessage(
                channel=os.environ.get("SLACK_CHANNEL", "#alerts-cow-amm"), text=msg
            )
