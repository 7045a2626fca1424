# tapedrive

A Python toolkit for working with tapes stored by the on-chain tape
program: addresses, account layouts, instruction builders, tape encoding,
and reassembling a tape from the blocks that recorded it.

## What is in the package

- **Keys and addresses** – `tapedrive.keys` has `Pubkey` (32 bytes, with a
  base58 text form via `Pubkey.from_string` and `str()`), `b58encode`,
  `b58decode`, `is_on_curve`, `create_program_address` and
  `find_program_address`. `tapedrive.pda` derives every address the program
  uses: `archive_pda`, `epoch_pda`, `block_pda`, `treasury_pda`,
  `treasury_ata`, `mint_pda`, `metadata_pda`, `tape_pda`, `writer_pda`,
  `miner_pda` and `spool_pda`.
- **Constants** – `tapedrive.consts` holds the seeds, sizes
  (`SEGMENT_SIZE`, `HEADER_SIZE`, `NAME_LEN`, proof lengths), token
  economics, the program and system identifiers, and the fixed addresses
  such as `ARCHIVE_ADDRESS` and `TREASURY_ATA`.
- **Accounts** – `tapedrive.state` has byte-exact layouts of the
  `Archive`, `Block`, `Epoch`, `Miner`, `Tape` and `Treasury` accounts.
  Each has `get_size()`, `unpack(data)` and `to_bytes()`; `Tape` also
  answers rent questions (`rent_per_block`, `rent_owed`,
  `has_minimum_rent`, `can_finalize`).
- **Events** – `tapedrive.event` decodes and encodes the `WriteEvent`,
  `UpdateEvent` and `FinalizeEvent` records the program logs.
- **Instructions** – `tapedrive.instruction` defines `Instruction` and
  `AccountMeta`; the builders live in `tapedrive.ix_program`
  (initialize, airdrop), `tapedrive.ix_miner` (register, mine, claim,
  close), `tapedrive.ix_spool` (create, destroy, pack, unpack, commit) and
  `tapedrive.ix_tape` (create, write, update, finalize, set header,
  subsidize). Mining proofs are `PoW` and `PoA` in `tapedrive.proofs`.
- **Tape encoding** – `tapedrive.header` has the 64-byte `TapeHeader` and
  the `TapeFlags`, `CompressionAlgo`, `EncryptionAlgo` and `MimeType`
  codes. `tapedrive.encoding` applies gzip compression and
  segment-number prefixing (`encode_tape`, `decode_tape`,
  `prefix_segments`, `unprefix_segments`, `compress`, `decompress`,
  `estimate_chunks`). `tapedrive.mime` maps MIME strings to codes and codes
  to file extensions.
- **Reading** – `tapedrive.block.process_block` turns a block in its
  JSON-RPC form (`json` transaction encoding) into segment writes and
  finalized tapes. `tapedrive.read` walks a tape's chain of slots from its
  tail back to its first write.
- **Rent** – `tapedrive.rent` has `rent_per_block`,
  `min_finalization_rent` and `rent_owed`, using saturating unsigned
  64-bit arithmetic.
- **Helpers** – `tapedrive.utils` (names, challenges, recall selection),
  `tapedrive.errors` (program error codes), `tapedrive.keypair` (ed25519
  keypairs stored as JSON byte arrays), `tapedrive.cluster` (cluster short
  names and their RPC URLs), `tapedrive.log` (coloured console output) and
  `tapedrive.output` (writing decoded data to a file or standard output).

## Examples

Derive the address of a tape from its owner and name:

```python
from tapedrive.keypair import Keypair
from tapedrive.pda import tape_pda, writer_pda
from tapedrive.utils import to_name, from_name

owner = Keypair.generate()
name = to_name("holiday-photos")          # 32 bytes, zero padded
tape_address, bump = tape_pda(owner.pubkey, name)
writer_address, _ = writer_pda(tape_address)

assert from_name(name) == "holiday-photos"
```

Work out what a tape costs to keep:

```python
from tapedrive.rent import rent_per_block, min_finalization_rent, rent_owed

per_block = rent_per_block(1_000)                 # 1,000 segments
to_finalize = min_finalization_rent(1_000)        # one year of blocks
owed = rent_owed(1_000, last_block=100, current_block=110)
```

Encode a file for a tape and decode it again:

```python
from tapedrive.encoding import encode_tape, decode_tape
from tapedrive.header import CompressionAlgo, EncryptionAlgo, MimeType, TapeFlags, TapeHeader

header = TapeHeader.new(MimeType.TEXT_PLAIN, CompressionAlgo.GZIP,
                        EncryptionAlgo.NONE, TapeFlags.PREFIXED)
encoded = encode_tape(b"hello, tape", header)    # sets header.data_len
assert decode_tape(encoded, header) == b"hello, tape"
header_bytes = header.to_bytes()                  # 64 bytes for the set-header instruction
```

Choose a cluster from its short name:

```python
from tapedrive.cluster import Cluster

Cluster.parse("d").rpc_url()       # the devnet endpoint
Cluster.parse("http://localhost:8899").rpc_url()
```

Read a tape back, given a function that returns the block at a slot in its
JSON-RPC form:

```python
from tapedrive.read import read_tape_segments

raw = read_tape_segments(fetch_block, tape_address, tail_slot)
```

`raw` holds the segments in order, each padded to 128 bytes, ready for
`decode_tape` together with the tape's header.

Keypairs are read from and written to JSON files of 64 byte values.
`get_keypair_path()` defaults to `~/.config/solana/id.json`, and
`get_payer(path)` loads the keypair there or creates a new one if it
cannot be loaded.

## Errors

Invalid input raises ordinary Python exceptions, mostly subclasses of
`ValueError` (`PubkeyError`, `AccountDataError`, `EventDecodeError`,
`TapeHeaderError`, `EncodingError`, `KeypairError`, `ReadError`).
Failures the on-chain program would report carry a
`tapedrive.errors.TapeError` code inside a
`tapedrive.errors.TapeProgramError`; malformed blocks raise
`tapedrive.block.BlockError`.

## What the package does not do

The package works entirely offline. It has no RPC client: it does not
fetch accounts or blocks, build or sign transactions, or send them to a
cluster. Block fetching is left to the caller through the function passed
to `tapedrive.read`. There is no command-line program, no local tape
store, and no archive, mining or web service.