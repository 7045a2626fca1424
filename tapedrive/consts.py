"""Seeds, sizes, economics and well-known addresses of the tape program."""

from tapedrive.keys import Pubkey, find_program_address

# Program-derived address seeds
ARCHIVE = b"archive"
BLOCK = b"block"
EPOCH = b"epoch"
MINER = b"miner"
SPOOL = b"spool"
WRITER = b"writer"
TAPE = b"tape"
TREASURY = b"treasury"
MINT = b"mint"
METADATA = b"metadata"

MINT_SEED = bytes([152, 68, 212, 200, 25, 113, 221, 71])

# Token metadata
METADATA_NAME = "TAPE"
METADATA_SYMBOL = "TAPE"
METADATA_URI = "https://tapedrive.io/metadata.json"

# Merkle trees
SEGMENT_TREE_HEIGHT = 18
SEGMENT_PROOF_LEN = SEGMENT_TREE_HEIGHT
TAPE_TREE_HEIGHT = 10
TAPE_PROOF_LEN = TAPE_TREE_HEIGHT

# Sizing
SEGMENT_SIZE = 128
MAX_SEGMENTS_PER_TAPE = 1 << (SEGMENT_TREE_HEIGHT - 1)
MAX_TAPES_PER_SPOOL = 1 << (TAPE_TREE_HEIGHT - 1)

# Token economics
TOKEN_DECIMALS = 10
ONE_TAPE = 10**TOKEN_DECIMALS
MAX_SUPPLY = 7_000_000 * ONE_TAPE

MIN_MINING_DIFFICULTY = 1
MIN_PACKING_DIFFICULTY = 0
MIN_PARTICIPATION_TARGET = 1
MAX_PARTICIPATION_TARGET = 100
MIN_CONSISTENCY_MULTIPLIER = 1
MAX_CONSISTENCY_MULTIPLIER = 32

# Time and epochs
BLOCK_DURATION_SECONDS = 60
EPOCH_BLOCKS = 10
ADJUSTMENT_INTERVAL = 50

# Rent
RENT_PER_SEGMENT = 100
EMPTY_SEGMENT = bytes(SEGMENT_SIZE)
EMPTY_PROOF = tuple(bytes(32) for _ in range(SEGMENT_PROOF_LEN))

# Miscellaneous
NAME_LEN = 32
HEADER_SIZE = 64

U64_MAX = (1 << 64) - 1

# Program and sysvar identifiers
PROGRAM_ID = Pubkey.from_string("tape9hFAE7jstfKB2QT1ovFNUZKKtDUyGZiGQpnBFdL")
SYSTEM_PROGRAM_ID = Pubkey(bytes(32))
TOKEN_PROGRAM_ID = Pubkey.from_string("TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA")
ASSOCIATED_TOKEN_PROGRAM_ID = Pubkey.from_string("ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL")
TOKEN_METADATA_PROGRAM_ID = Pubkey.from_string("metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bt518x1s")
SYSVAR_RENT_ID = Pubkey.from_string("SysvarRent111111111111111111111111111111111")
SYSVAR_SLOT_HASHES_ID = Pubkey.from_string("SysvarS1otHashes111111111111111111111111111")

# Fixed program addresses
ARCHIVE_ADDRESS, ARCHIVE_BUMP = find_program_address([ARCHIVE], PROGRAM_ID)
EPOCH_ADDRESS, EPOCH_BUMP = find_program_address([EPOCH], PROGRAM_ID)
BLOCK_ADDRESS, BLOCK_BUMP = find_program_address([BLOCK], PROGRAM_ID)
MINT_ADDRESS, MINT_BUMP = find_program_address([MINT, MINT_SEED], PROGRAM_ID)
TREASURY_ADDRESS, TREASURY_BUMP = find_program_address([TREASURY], PROGRAM_ID)
TREASURY_ATA = find_program_address(
    [bytes(TREASURY_ADDRESS), bytes(TOKEN_PROGRAM_ID), bytes(MINT_ADDRESS)],
    ASSOCIATED_TOKEN_PROGRAM_ID,
)[0]