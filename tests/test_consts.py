from tapedrive import consts
from tapedrive.keys import (
    Pubkey,
    b58decode,
    b58encode,
    create_program_address,
    find_program_address,
    is_on_curve,
)
from tapedrive.utils import padded_array


def test_program_id_text():
    text = "tape9hFAE7jstfKB2QT1ovFNUZKKtDUyGZiGQpnBFdL"
    assert Pubkey.from_string(text) == consts.PROGRAM_ID
    assert b58encode(bytes(consts.PROGRAM_ID)) == text


def test_empty_segment_is_zero_padding():
    assert padded_array(b"", consts.SEGMENT_SIZE) == consts.EMPTY_SEGMENT
    assert len(consts.EMPTY_PROOF) == consts.SEGMENT_PROOF_LEN
    assert all(padded_array(b"", 32) == node for node in consts.EMPTY_PROOF)


def test_fixed_addresses_match_bumps():
    pairs = [
        ([consts.ARCHIVE], consts.ARCHIVE_ADDRESS, consts.ARCHIVE_BUMP),
        ([consts.EPOCH], consts.EPOCH_ADDRESS, consts.EPOCH_BUMP),
        ([consts.BLOCK], consts.BLOCK_ADDRESS, consts.BLOCK_BUMP),
        ([consts.MINT, consts.MINT_SEED], consts.MINT_ADDRESS, consts.MINT_BUMP),
        ([consts.TREASURY], consts.TREASURY_ADDRESS, consts.TREASURY_BUMP),
    ]
    for seeds, address, bump in pairs:
        assert create_program_address(seeds + [bytes([bump])], consts.PROGRAM_ID) == address
        assert find_program_address(seeds, consts.PROGRAM_ID) == (address, bump)
        assert not is_on_curve(bytes(address))


def test_treasury_ata_is_off_curve_and_distinct():
    assert not is_on_curve(bytes(consts.TREASURY_ATA))
    assert consts.TREASURY_ATA != consts.TREASURY_ADDRESS


def test_system_program_is_all_ones():
    assert b58decode("11111111111111111111111111111111") == bytes(32)
    assert Pubkey.from_string("11111111111111111111111111111111") == consts.SYSTEM_PROGRAM_ID