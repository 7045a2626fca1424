import pytest

from tapedrive.consts import SEGMENT_PROOF_LEN, TAPE_PROOF_LEN
from tapedrive.ix_spool import (
    SpoolInstruction,
    build_commit_ix,
    build_create_ix,
    build_destroy_ix,
    build_pack_ix,
    build_unpack_ix,
)
from tapedrive.keys import Pubkey
from tapedrive.pda import spool_pda

SIGNER = Pubkey(bytes([11]) * 32)
MINER = Pubkey(bytes([12]) * 32)
SPOOL = Pubkey(bytes([13]) * 32)
TAPE = Pubkey(bytes([14]) * 32)
VALUE = bytes([0xAB]) * 32


def test_create_uses_spool_pda():
    ix = build_create_ix(SIGNER, MINER, 7)
    assert ix.accounts[2].pubkey == spool_pda(MINER, 7)[0]
    assert ix.data == bytes([SpoolInstruction.CREATE]) + (7).to_bytes(8, "little")


def test_destroy_data():
    ix = build_destroy_ix(SIGNER, MINER, 3)
    assert ix.data[0] == SpoolInstruction.DESTROY == 0x41
    assert int.from_bytes(ix.data[1:], "little") == 3
    assert ix.accounts[2].pubkey == spool_pda(MINER, 3)[0]


def test_pack_data_and_readonly_tape():
    ix = build_pack_ix(SIGNER, SPOOL, TAPE, VALUE)
    assert ix.data == bytes([SpoolInstruction.PACK]) + VALUE
    assert ix.accounts[2].pubkey == TAPE
    assert ix.accounts[2].is_writable is False


def test_pack_rejects_short_value():
    with pytest.raises(ValueError):
        build_pack_ix(SIGNER, SPOOL, TAPE, b"short")


def test_unpack_layout():
    proof = [bytes([i]) * 32 for i in range(TAPE_PROOF_LEN)]
    ix = build_unpack_ix(SIGNER, SPOOL, 5, proof, VALUE)
    assert ix.data[0] == SpoolInstruction.UNPACK
    assert int.from_bytes(ix.data[1:9], "little") == 5
    assert ix.data[9 : 9 + 32 * TAPE_PROOF_LEN] == b"".join(proof)
    assert ix.data[-32:] == VALUE


def test_unpack_rejects_wrong_proof_length():
    proof = [bytes(32)] * SEGMENT_PROOF_LEN
    with pytest.raises(ValueError):
        build_unpack_ix(SIGNER, SPOOL, 0, proof, VALUE)


def test_commit_layout():
    proof = [bytes([i]) * 32 for i in range(SEGMENT_PROOF_LEN)]
    ix = build_commit_ix(SIGNER, MINER, SPOOL, 9, proof, VALUE)
    assert ix.data[0] == SpoolInstruction.COMMIT
    assert len(ix.data) == 1 + 8 + 32 * SEGMENT_PROOF_LEN + 32
    assert ix.accounts[2].pubkey == SPOOL
    assert ix.accounts[2].is_writable is False