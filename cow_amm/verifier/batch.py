"""
Assembly of the calls that reproduce the side effects of a settlement of an order hint,
and the encoding of the batch for Multicall3.
"""

from typing import Optional

from hexbytes import HexBytes
from web3 import Web3

from contracts.erc1271 import erc1271
from contracts.multicall3 import multicall3
from cow_amm.abi import decode_result
from cow_amm.constants import REQUIRE_SUCCESS
from cow_amm.errors import InvalidInteraction
from cow_amm.models import Call, CallResult, Interaction, OrderHint, SimulationBatch

# only used for encoding, never connected
_codec = Web3()
MULTICALL3 = _codec.eth.contract(abi=multicall3)
ERC1271 = _codec.eth.contract(abi=erc1271)


def interaction_call(interaction: Interaction, position: str, index: int) -> Call:
    """
    Multicall3 calls cannot forward value, so an interaction that sends value cannot be
    reproduced and is rejected.
    """
    if interaction.value != 0:
        raise InvalidInteraction(
            f"{position}-interaction {index} to {interaction.target} "
            f"sends value {interaction.value}"
        )
    return Call(interaction.target, interaction.call_data)


def signature_check_call(amm: str, digest: bytes, signature: bytes) -> Call:
    """ERC-1271 call the settlement contract makes to verify the order signature."""
    call_data = ERC1271.encode_abi("isValidSignature", args=[digest, signature])
    return Call(amm, bytes(HexBytes(call_data)))


def build_simulation_batch(
    amm: str,
    hint: OrderHint,
    digest: bytes,
    commitment_call: Optional[Call] = None,
) -> SimulationBatch:
    """
    Calls in settlement order: pre-interactions, signature check, post-interactions and,
    if given, the commitment read. All interactions are validated before any call is
    built.
    """
    pre_calls = [
        interaction_call(interaction, "pre", i)
        for i, interaction in enumerate(hint.pre_interactions)
    ]
    post_calls = [
        interaction_call(interaction, "post", i)
        for i, interaction in enumerate(hint.post_interactions)
    ]

    calls = pre_calls + [signature_check_call(amm, digest, hint.signature)] + post_calls
    if commitment_call is not None:
        calls.append(commitment_call)

    return SimulationBatch(
        calls=calls,
        num_pre=len(pre_calls),
        num_post=len(post_calls),
        has_commitment_read=commitment_call is not None,
    )


def encode_try_aggregate(
    batch: SimulationBatch, require_success: bool = REQUIRE_SUCCESS
) -> bytes:
    """
    Calldata of `Multicall3.tryAggregate` for the batch. Without `require_success` a
    failing call does not revert the batch and is reported in its own result entry.
    """
    calls = [
        (Web3.to_checksum_address(call.target), call.call_data) for call in batch.calls
    ]
    call_data = MULTICALL3.encode_abi("tryAggregate", args=[require_success, calls])
    return bytes(HexBytes(call_data))


def decode_try_aggregate(data: bytes) -> list[CallResult]:
    """Results of `Multicall3.tryAggregate`, in call order."""
    (results,) = decode_result(multicall3, "tryAggregate", data)
    return [CallResult(bool(success), bytes(ret)) for success, ret in results]
