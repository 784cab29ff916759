"""
Solana program constants
"""

# Token Programs
TOKEN_PROGRAM_ID = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
TOKEN_2022_PROGRAM_ID = "TokenzQdBNbLqP5VEhdkAS6EPFLC1PHnBqCXEpPxuEb"

# Associated Token Program
ASSOCIATED_TOKEN_PROGRAM_ID = "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL"

# System Program
SYSTEM_PROGRAM_ID = "11111111111111111111111111111111"

# Associated Token Program instruction tags
ATA_CREATE_DATA = b""
ATA_CREATE_IDEMPOTENT_DATA = bytes([1])

# SPL mint account layout (shared by Token and Token-2022 base mints)
# [0:4]   mint_authority COption tag (u32)
# [4:36]  mint_authority
# [36:44] supply (u64)
# [44]    decimals (u8)
# [45]    is_initialized (bool)
# [46:50] freeze_authority COption tag (u32)
# [50:82] freeze_authority
MINT_ACCOUNT_SIZE = 82
MINT_DECIMALS_OFFSET = 44
