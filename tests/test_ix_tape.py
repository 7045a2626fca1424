import pytest

from tapedrive.consts import (
    ARCHIVE_ADDRESS,
    HEADER_SIZE,
    SEGMENT_PROOF_LEN,
    SEGMENT_SIZE,
    TOKEN_PROGRAM_ID,
    TREASURY_ATA,
)
from tapedrive.ix_tape import (
    TapeInstruction,
    UpdateData,
    build_create_ix,
    build_finalize_ix,
    build_set_header_ix,
    build_subsidize_ix,
    build_update_ix,
    build_write_ix,
)
from tapedrive.keys import Pubkey
from tapedrive.pda import tape_pda, writer_pda
from tapedrive.utils import to_name

SIGNER = Pubkey(bytes([21]) * 32)
TAPE = Pubkey(bytes([22]) * 32)
WRITER = Pubkey(bytes([23]) * 32)
ATA = Pubkey(bytes([24]) * 32)


def test_create_uses_pdas():
    ix = build_create_ix(SIGNER, "my tape")
    tape, _ = tape_pda(SIGNER, to_name("my tape"))
    assert ix.accounts[1].pubkey == tape
    assert ix.accounts[2].pubkey == writer_pda(tape)[0]
    assert ix.data == bytes([TapeInstruction.CREATE]) + to_name("my tape")


def test_set_header_data():
    header = bytes(range(HEADER_SIZE))
    ix = build_set_header_ix(SIGNER, TAPE, header)
    assert ix.data == bytes([TapeInstruction.SET_HEADER]) + header


def test_set_header_rejects_wrong_size():
    with pytest.raises(ValueError):
        build_set_header_ix(SIGNER, TAPE, bytes(HEADER_SIZE - 1))


def test_write_appends_payload():
    ix = build_write_ix(SIGNER, TAPE, WRITER, b"hello")
    assert ix.data == bytes([TapeInstruction.WRITE]) + b"hello"
    assert [meta.pubkey for meta in ix.accounts] == [SIGNER, TAPE, WRITER]


def test_update_roundtrip():
    old = bytes([1]) * SEGMENT_SIZE
    new = bytes([2]) * SEGMENT_SIZE
    proof = [bytes([i]) * 32 for i in range(SEGMENT_PROOF_LEN)]
    ix = build_update_ix(SIGNER, TAPE, WRITER, 42, old, new, proof)
    assert ix.data[0] == TapeInstruction.UPDATE
    decoded = UpdateData.try_from_bytes(ix.data[1:])
    assert decoded.segment_number == 42
    assert decoded.old_data == old
    assert decoded.new_data == new
    assert decoded.proof == tuple(proof)


def test_update_rejects_short_segment():
    proof = [bytes(32)] * SEGMENT_PROOF_LEN
    with pytest.raises(ValueError):
        build_update_ix(SIGNER, TAPE, WRITER, 0, b"x", bytes(SEGMENT_SIZE), proof)


def test_update_data_rejects_wrong_length():
    with pytest.raises(ValueError):
        UpdateData.try_from_bytes(b"\x00" * 10)


def test_finalize_accounts():
    ix = build_finalize_ix(SIGNER, TAPE, WRITER)
    assert ix.data == bytes([TapeInstruction.FINALIZE])
    assert ix.accounts[3].pubkey == ARCHIVE_ADDRESS
    assert ix.accounts[3].is_writable


def test_subsidize():
    ix = build_subsidize_ix(SIGNER, ATA, TAPE, 5000)
    assert ix.data[0] == TapeInstruction.SUBSIDIZE == 0x15
    assert int.from_bytes(ix.data[1:], "little") == 5000
    keys = [meta.pubkey for meta in ix.accounts]
    assert keys == [SIGNER, ATA, TAPE, TREASURY_ATA, TOKEN_PROGRAM_ID]