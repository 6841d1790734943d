from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from eth_utils import is_hex, is_hex_address

from punktransfers.core.constants import (
    MAX_ASSET_INDEX,
    MAX_UINT64,
    PUNK_ASSIGN_T0,
    PUNK_TRANSFER_T0,
    PUNKS_CONTRACT_ADDRESS,
    PUNKS_DEPLOYMENT_BLOCK,
    ZERO_ADDRESS,
)
from punktransfers.core.errors import ConfigError


def _check_topic(name: str, value: str) -> None:
    if not (isinstance(value, str) and value.startswith("0x") and len(value) == 66 and is_hex(value)):
        raise ConfigError(f"{name} must be a 0x-prefixed 32-byte hex string, got {value!r}")


@dataclass(frozen=True)
class IndexerConfig:
    """Everything the matcher and decoder need to know about the target contract."""

    contract_address: str
    deployment_block: int
    transfer_topic0: str
    assign_topic0: str
    zero_address: str = ZERO_ADDRESS
    address_case_sensitive: bool = False
    max_asset_index: int = MAX_ASSET_INDEX

    def __post_init__(self) -> None:
        if not is_hex_address(self.contract_address):
            raise ConfigError(f"contract_address is not a 20-byte hex address: {self.contract_address!r}")
        if not is_hex_address(self.zero_address):
            raise ConfigError(f"zero_address is not a 20-byte hex address: {self.zero_address!r}")
        if self.deployment_block < 0:
            raise ConfigError("deployment_block must be >= 0")
        if not 0 <= self.max_asset_index <= MAX_UINT64:
            raise ConfigError(f"max_asset_index must be within [0, {MAX_UINT64}]")
        _check_topic("transfer_topic0", self.transfer_topic0)
        _check_topic("assign_topic0", self.assign_topic0)
        if self.transfer_topic0.lower() == self.assign_topic0.lower():
            raise ConfigError("transfer_topic0 and assign_topic0 must differ")

    @classmethod
    def punks(cls, **overrides) -> IndexerConfig:
        """CryptoPunks mainnet defaults; keyword arguments override single fields."""
        values = dict(
            contract_address=PUNKS_CONTRACT_ADDRESS,
            deployment_block=PUNKS_DEPLOYMENT_BLOCK,
            transfer_topic0=PUNK_TRANSFER_T0,
            assign_topic0=PUNK_ASSIGN_T0,
        )
        values.update(overrides)
        return cls(**values)

    def normalize_address(self, address: str) -> str:
        return address if self.address_case_sensitive else address.lower()

    @property
    def topic0s(self) -> list[str]:
        return [self.transfer_topic0.lower(), self.assign_topic0.lower()]


@dataclass(frozen=True)
class StreamConfig:
    """Configuration for the Kafka log source (glue only, never read by the core)."""

    bootstrap_servers: str = "msk"
    topic: str = "ethereum-logs"
    group_id: str = "punk-transfer-processor"
    security_protocol: str | None = None  # e.g. "SASL_SSL"
    sasl_mechanism: str | None = None  # e.g. "OAUTHBEARER"
    start_offset: str = "earliest"
    poll_timeout_s: float = 1.0
    extra: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> StreamConfig:
        env = os.environ if environ is None else environ
        return cls(
            bootstrap_servers=env.get("KAFKA_BOOTSTRAP_SERVERS") or env.get("MSK_BOOTSTRAP_SERVERS") or "msk",
            topic=env.get("KAFKA_TOPIC", "ethereum-logs"),
            group_id=env.get("KAFKA_GROUP_ID", "punk-transfer-processor"),
            security_protocol=env.get("KAFKA_SECURITY_PROTOCOL") or None,
            sasl_mechanism=env.get("KAFKA_SASL_MECHANISM") or None,
            start_offset=env.get("KAFKA_START_OFFSET", "earliest"),
        )

    def consumer_properties(self) -> dict[str, str]:
        """librdkafka properties for `confluent_kafka.Consumer`."""
        props = {
            "bootstrap.servers": self.bootstrap_servers,
            "group.id": self.group_id,
            "auto.offset.reset": self.start_offset,
            "enable.auto.commit": "true",
        }
        if self.security_protocol:
            props["security.protocol"] = self.security_protocol
        if self.sasl_mechanism:
            props["sasl.mechanism"] = self.sasl_mechanism
        props.update(self.extra)
        return props
