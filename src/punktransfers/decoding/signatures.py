"""Event signature helpers (keccak topic0 computation)."""

from __future__ import annotations

from eth_utils.abi import event_signature_to_log_topic

from punktransfers.core.config import IndexerConfig
from punktransfers.core.constants import PUNK_ASSIGN_SIGNATURE, PUNK_TRANSFER_SIGNATURE


def event_topic0(signature: str) -> str:
    """Return the lowercase 0x-prefixed topic0 for a canonical event signature."""
    return "0x" + event_signature_to_log_topic(signature).hex()


def config_from_signatures(
    *,
    contract_address: str,
    deployment_block: int,
    transfer_signature: str = PUNK_TRANSFER_SIGNATURE,
    assign_signature: str = PUNK_ASSIGN_SIGNATURE,
    **kwargs,
) -> IndexerConfig:
    """Build an IndexerConfig from event signatures instead of raw hashes."""
    return IndexerConfig(
        contract_address=contract_address,
        deployment_block=deployment_block,
        transfer_topic0=event_topic0(transfer_signature),
        assign_topic0=event_topic0(assign_signature),
        **kwargs,
    )
