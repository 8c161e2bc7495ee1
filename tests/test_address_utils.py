from web3 import Web3

from arb_bridge.utils import apply_l1_to_l2_alias, undo_l1_to_l2_alias


def test_apply_alias_adds_offset():
    aliased = apply_l1_to_l2_alias("0x0000000000000000000000000000000000000000")
    assert aliased.lower() == "0x1111000000000000000000000000000000001111"


def test_apply_alias_wraps_around():
    aliased = apply_l1_to_l2_alias("0xffffffffffffffffffffffffffffffffffffffff")
    assert aliased.lower() == "0x1111000000000000000000000000000000001110"


def test_undo_alias_reverses_apply():
    l1_address = Web3.to_checksum_address("0x" + "e5" * 20)
    aliased = apply_l1_to_l2_alias(l1_address)

    assert aliased != l1_address
    assert undo_l1_to_l2_alias(aliased) == l1_address


def test_undo_alias_wraps_around():
    original = undo_l1_to_l2_alias("0x0000000000000000000000000000000000000001")
    assert original.lower() == "0xeeeeffffffffffffffffffffffffffffffffeef0"


def test_alias_returns_checksum_address():
    aliased = apply_l1_to_l2_alias("0x" + "ab" * 20)
    assert aliased == Web3.to_checksum_address(aliased)
