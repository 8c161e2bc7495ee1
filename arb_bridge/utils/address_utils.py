"""L1 -> L2 address aliasing.

When an L1 contract sends a message to L2, the L2 sees it coming from the
sender's alias: the L1 address plus a fixed offset, wrapped to 160 bits.
"""

from web3 import Web3

from arb_bridge.consts import ADDRESS_ALIAS_OFFSET

_ADDRESS_SPACE = 2**160


def apply_l1_to_l2_alias(l1_address: str) -> str:
    aliased = (int(l1_address, 16) + ADDRESS_ALIAS_OFFSET) % _ADDRESS_SPACE
    return Web3.to_checksum_address(aliased.to_bytes(20, "big"))


def undo_l1_to_l2_alias(l2_address: str) -> str:
    original = (int(l2_address, 16) - ADDRESS_ALIAS_OFFSET) % _ADDRESS_SPACE
    return Web3.to_checksum_address(original.to_bytes(20, "big"))
