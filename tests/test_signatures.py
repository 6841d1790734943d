from punktransfers.core.constants import (
    PUNK_ASSIGN_SIGNATURE,
    PUNK_ASSIGN_T0,
    PUNK_TRANSFER_SIGNATURE,
    PUNK_TRANSFER_T0,
    PUNKS_CONTRACT_ADDRESS,
)
from punktransfers.decoding.signatures import config_from_signatures, event_topic0


def test_topic0_constants_match_signatures() -> None:
    assert event_topic0(PUNK_TRANSFER_SIGNATURE) == PUNK_TRANSFER_T0
    assert event_topic0(PUNK_ASSIGN_SIGNATURE) == PUNK_ASSIGN_T0


def test_erc20_transfer_topic0() -> None:
    assert event_topic0("Transfer(address,address,uint256)") == (
        "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"
    )


def test_config_from_signatures() -> None:
    config = config_from_signatures(contract_address=PUNKS_CONTRACT_ADDRESS, deployment_block=1)
    assert config.transfer_topic0 == PUNK_TRANSFER_T0
    assert config.assign_topic0 == PUNK_ASSIGN_T0
