from __future__ import annotations

# CryptoPunks market contract (mainnet, lowercase)
PUNKS_CONTRACT_ADDRESS = "0xb47e3cd837ddf8e4c57f05d70ab865de6e193bbb"
PUNKS_DEPLOYMENT_BLOCK = 3_914_495

# topic0 constants (lowercase, 0x-prefixed)
PUNK_TRANSFER_T0 = "0x05af636b70da6819000c49f85b21fa82081c632069bb626f30932034099107d8"
PUNK_ASSIGN_T0   = "0x8a0e37b73a0d9c82e205d4d1a3ff3d0b57ce5f4d7bccf6bac03336dc101cb7ba"

PUNK_TRANSFER_SIGNATURE = "PunkTransfer(address,address,uint256)"
PUNK_ASSIGN_SIGNATURE   = "Assign(address,uint256)"

ZERO_ADDRESS = "0x" + "0" * 40

# Largest asset index accepted by default (signed 64-bit, fits BIGINT / int64 columns)
MAX_ASSET_INDEX = 2**63 - 1

# Upper bound of the uint64 asset_index column written by sinks
MAX_UINT64 = 2**64 - 1
