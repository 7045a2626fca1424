import pytest

from tapedrive.consts import (
    ARCHIVE_ADDRESS,
    BLOCK_ADDRESS,
    EPOCH_ADDRESS,
    PROGRAM_ID,
    SYSTEM_PROGRAM_ID,
    TREASURY_ATA,
)
from tapedrive.ix_miner import (
    MinerInstruction,
    build_claim_ix,
    build_close_ix,
    build_mine_ix,
    build_register_ix,
)
from tapedrive.keys import Pubkey
from tapedrive.pda import miner_pda
from tapedrive.proofs import PoA, PoW
from tapedrive.utils import to_name

SIGNER = Pubkey(bytes([3]) * 32)
MINER = Pubkey(bytes([4]) * 32)
TAPE = Pubkey(bytes([5]) * 32)
BENEFICIARY = Pubkey(bytes([6]) * 32)


def test_discriminators_match_source():
    assert build_register_ix(SIGNER, "a").data[0] == 0x20
    assert build_close_ix(SIGNER, MINER).data[0] == 0x21
    assert build_mine_ix(SIGNER, MINER, TAPE, PoW(), PoA()).data[0] == 0x22
    assert build_claim_ix(SIGNER, MINER, BENEFICIARY, 1).data[0] == 0x23


def test_register_data_and_miner_address():
    ix = build_register_ix(SIGNER, "alice")
    assert ix.program_id == PROGRAM_ID
    assert ix.data == bytes([MinerInstruction.REGISTER]) + to_name("alice")
    assert ix.accounts[1].pubkey == miner_pda(SIGNER, to_name("alice"))[0]


def test_register_rejects_long_name():
    with pytest.raises(ValueError):
        build_register_ix(SIGNER, "x" * 33)


def test_mine_data_concatenates_proofs():
    pow_solution = PoW(digest=bytes(range(16)), nonce=bytes(range(8)))
    poa_solution = PoA(seed=bytes([2]) * 16)
    ix = build_mine_ix(SIGNER, MINER, TAPE, pow_solution, poa_solution)
    assert ix.data == (
        bytes([MinerInstruction.MINE]) + pow_solution.to_bytes() + poa_solution.to_bytes()
    )


def test_mine_accounts():
    ix = build_mine_ix(SIGNER, MINER, TAPE, PoW(), PoA())
    keys = [meta.pubkey for meta in ix.accounts]
    assert keys[:6] == [SIGNER, EPOCH_ADDRESS, BLOCK_ADDRESS, MINER, TAPE, ARCHIVE_ADDRESS]
    assert ix.accounts[5].is_writable is False


def test_claim_amount_roundtrip():
    ix = build_claim_ix(SIGNER, MINER, BENEFICIARY, 987654321)
    assert ix.data[0] == MinerInstruction.CLAIM
    assert int.from_bytes(ix.data[1:9], "little") == 987654321
    assert ix.accounts[4].pubkey == TREASURY_ATA
    assert ix.accounts[4].is_writable


def test_close_instruction():
    ix = build_close_ix(SIGNER, MINER)
    assert ix.data == bytes([MinerInstruction.UNREGISTER])
    assert ix.accounts[2].pubkey == SYSTEM_PROGRAM_ID
    assert ix.accounts[2].is_writable is False