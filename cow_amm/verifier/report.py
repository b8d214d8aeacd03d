"""
Positional checks of the results of a simulated settlement.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

from contracts.cowamm_constantproduct import cowamm_constantproduct
from contracts.cowamm_pool import cowamm_pool
from contracts.erc1271 import erc1271
from cow_amm.abi import (
    decode_custom_error,
    decode_result,
    decode_revert_reason,
    error_selectors,
)
from cow_amm.constants import ERC1271_MAGIC_VALUE
from cow_amm.errors import DecodeError
from cow_amm.models import CallResult, CommitmentExpectation

PRE_INTERACTION_FAILED = "pre-interaction failed"
SIGNATURE_INVALID = "signature invalid"
POST_INTERACTION_FAILED = "post-interaction failed"
COMMITMENT_READ_FAILED = "commitment read failed"
UNEXPECTED_RESULT_COUNT = "unexpected result count"

# errors the AMMs raise from within a settlement
AMM_ERRORS = error_selectors(cowamm_constantproduct, cowamm_pool)


@dataclass
class VerificationReport:
    """Named failures of a simulation, empty if the order hint can be settled."""

    failures: list[str] = field(default_factory=list)
    results: list[CallResult] = field(default_factory=list)
    commitment: Optional[bytes] = None

    @property
    def ok(self) -> bool:
        return not self.failures


def revert_reason(data: bytes) -> str:
    """Readable revert reason of a failed call in the batch."""
    return (
        decode_custom_error(data, AMM_ERRORS)
        or decode_revert_reason(data)
        or "0x" + data.hex()
    )


def _failure(message: str, result: CallResult) -> str:
    if not result.return_data:
        return message
    return f"{message} ({revert_reason(result.return_data)})"


def _returns_magic_value(result: CallResult) -> bool:
    try:
        (magic_value,) = decode_result(erc1271, "isValidSignature", result.return_data)
    except DecodeError:
        return False
    return bytes(magic_value) == ERC1271_MAGIC_VALUE


def _decode_commitment(result: CallResult) -> Optional[bytes]:
    if len(result.return_data) != 32:
        return None
    return result.return_data


def check_simulation_results(
    num_pre: int,
    num_post: int,
    results: list[CallResult],
    commitment: Optional[CommitmentExpectation] = None,
) -> VerificationReport:
    """
    Check the results of a batch built as
    [pre-interactions] ++ [signature check] ++ [post-interactions] ++ [commitment read]:

    - results [0, num_pre) must succeed,
    - result num_pre must succeed and return the ERC-1271 magic value,
    - results (num_pre, num_pre + num_post] must succeed,
    - result num_pre + num_post + 1, present iff `commitment` is given, must succeed and
      return the expected commitment.

    Every check that can be evaluated is evaluated, failures are collected rather than
    returned on the first one.
    """
    report = VerificationReport(results=list(results))
    expected_count = num_pre + 1 + num_post + (1 if commitment is not None else 0)
    if len(results) != expected_count:
        report.failures.append(
            f"{UNEXPECTED_RESULT_COUNT}: expected {expected_count}, got {len(results)}"
        )

    for i, result in enumerate(results[:num_pre]):
        if not result.success:
            report.failures.append(
                _failure(f"{PRE_INTERACTION_FAILED}: pre-interaction {i}", result)
            )

    signature_index = num_pre
    if signature_index < len(results):
        signature_result = results[signature_index]
        if not signature_result.success:
            reason = f"{SIGNATURE_INVALID}: isValidSignature reverted"
            report.failures.append(_failure(reason, signature_result))
        elif not _returns_magic_value(signature_result):
            report.failures.append(
                f"{SIGNATURE_INVALID}: returned 0x{signature_result.return_data.hex()}"
            )

    post_start = signature_index + 1
    for i, result in enumerate(results[post_start : post_start + num_post]):
        if not result.success:
            report.failures.append(
                _failure(f"{POST_INTERACTION_FAILED}: post-interaction {i}", result)
            )

    commitment_index = post_start + num_post
    if commitment is not None and commitment_index < len(results):
        commitment_result = results[commitment_index]
        value = _decode_commitment(commitment_result)
        if not commitment_result.success or value is None:
            report.failures.append(COMMITMENT_READ_FAILED)
        else:
            report.commitment = value
            if value != commitment.expected:
                report.failures.append(
                    f"{commitment.mismatch_reason}: commitment is 0x{value.hex()}"
                )

    return report
