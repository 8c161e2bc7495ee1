from unittest.mock import MagicMock, patch

import pytest
from eth_abi import encode
from hexbytes import HexBytes
from web3 import Web3

from arb_bridge.consts import ARB_SYS_ADDRESS
from arb_bridge.exceptions import TransactionReceiptError
from arb_bridge.message import (
    EthDepositMessage,
    L1ToL2Message,
    L1TransactionReceipt,
    L2TransactionReceipt,
    calculate_deposit_tx_id,
)
from arb_bridge.types import EthDepositStatus, InboxMessageKind, L1ToL2MessageStatus
from tests.event_logs import build_log, build_receipt

CHAIN_ID = 412346
ALIASED_SENDER = Web3.to_checksum_address("0x" + "b2" * 20)
DESTINATION = Web3.to_checksum_address("0x" + "d1" * 20)
L1_GATEWAY = Web3.to_checksum_address("0x" + "9a" * 20)


@pytest.fixture
def l2_w3():
    w3 = MagicMock()
    w3.eth.chain_id = CHAIN_ID
    return w3


def _retryable_payload(gas_limit=50_000, data=b"\x12\x34"):
    header = encode(
        ["address", "uint256", "uint256", "uint256", "address", "address", "uint256", "uint256", "uint256"],
        [DESTINATION, 0, 10**16, 4_000, DESTINATION, DESTINATION, gas_limit, 300, len(data)],
    )
    return header + data


def _message_logs(abis, network, message_number, kind, payload, log_index=0):
    bridge_log = build_log(
        abis["bridge_abi"],
        "MessageDelivered",
        network.eth_bridge.bridge,
        {
            "messageIndex": message_number,
            "beforeInboxAcc": b"\x00" * 32,
            "inbox": network.eth_bridge.inbox,
            "kind": kind,
            "sender": ALIASED_SENDER,
            "messageDataHash": bytes(Web3.keccak(payload)),
            "baseFeeL1": 1_000_000_000,
            "timestamp": 1_700_000_000,
        },
        log_index,
    )
    inbox_log = build_log(
        abis["inbox_abi"],
        "InboxMessageDelivered",
        network.eth_bridge.inbox,
        {"messageNum": message_number, "data": payload},
        log_index + 1,
    )
    return [bridge_log, inbox_log]


def _retryable_receipt(abis, network, gas_limit=50_000, data=b"\x12\x34"):
    logs = _message_logs(
        abis,
        network,
        5,
        InboxMessageKind.L1_MESSAGE_TYPE_SUBMIT_RETRYABLE_TX,
        _retryable_payload(gas_limit, data),
    )
    return L1TransactionReceipt(build_receipt(logs))


def _eth_deposit_receipt(abis, network):
    payload = bytes(HexBytes(DESTINATION)) + (10**19).to_bytes(32, "big")
    logs = _message_logs(abis, network, 7, InboxMessageKind.L1_MESSAGE_TYPE_ETH_DEPOSIT, payload)
    return L1TransactionReceipt(build_receipt(logs))


def test_get_message_events(abis, local_network):
    receipt = _retryable_receipt(abis, local_network)

    events = receipt.get_message_events()

    assert len(events) == 1
    assert events[0].message_number == 5
    assert events[0].kind == InboxMessageKind.L1_MESSAGE_TYPE_SUBMIT_RETRYABLE_TX
    assert events[0].sender == ALIASED_SENDER
    assert events[0].base_fee_l1 == 1_000_000_000
    assert events[0].inbox == local_network.eth_bridge.inbox
    assert events[0].data == _retryable_payload()


def test_message_without_inbox_data_raises(abis, local_network):
    bridge_log, _ = _message_logs(abis, local_network, 5, 9, _retryable_payload())
    receipt = L1TransactionReceipt(build_receipt([bridge_log]))

    with pytest.raises(TransactionReceiptError, match="No inbox message data found for message 5"):
        receipt.get_message_events()


def test_receipt_exposes_hash_and_fields(abis, local_network):
    receipt = _retryable_receipt(abis, local_network)

    assert receipt.transaction_hash == HexBytes("0x" + "ab" * 32)
    assert receipt.status == 1
    assert receipt["blockNumber"] == 1


def test_get_l1_to_l2_messages(abis, local_network, l2_w3):
    receipt = _retryable_receipt(abis, local_network)

    messages = receipt.get_l1_to_l2_messages(l2_w3)

    assert len(messages) == 1
    message = messages[0]
    assert isinstance(message, L1ToL2Message)
    assert message.chain_id == CHAIN_ID
    assert message.sender == ALIASED_SENDER
    assert message.message_number == 5
    assert message.l1_base_fee == 1_000_000_000
    assert message.message_data.dest_address == DESTINATION
    assert message.message_data.gas_limit == 50_000
    assert message.message_data.data == b"\x12\x34"
    assert receipt.get_eth_deposits(l2_w3) == []


def test_get_l1_to_l2_message_index_out_of_range(abis, local_network, l2_w3):
    receipt = _retryable_receipt(abis, local_network)

    assert receipt.get_l1_to_l2_message(l2_w3).message_number == 5
    with pytest.raises(TransactionReceiptError, match="index 1 requested"):
        receipt.get_l1_to_l2_message(l2_w3, 1)


def test_get_eth_deposits(abis, local_network, l2_w3):
    receipt = _eth_deposit_receipt(abis, local_network)

    deposits = receipt.get_eth_deposits(l2_w3)

    assert len(deposits) == 1
    deposit = deposits[0]
    assert isinstance(deposit, EthDepositMessage)
    assert deposit.to_address == DESTINATION
    assert deposit.value == 10**19
    assert deposit.from_address == ALIASED_SENDER
    assert deposit.l2_deposit_tx_hash == calculate_deposit_tx_id(CHAIN_ID, 7, ALIASED_SENDER, DESTINATION, 10**19)
    assert receipt.get_l1_to_l2_messages(l2_w3) == []


def test_wait_for_l2_eth_deposit(abis, local_network, l2_w3):
    receipt = _eth_deposit_receipt(abis, local_network)
    l2_receipt = build_receipt([])
    l2_w3.eth.get_transaction_receipt.return_value = l2_receipt

    result = receipt.wait_for_l2(l2_w3)

    assert result.complete
    assert result.status == EthDepositStatus.DEPOSITED
    assert result.l2_tx_receipt is l2_receipt
    assert isinstance(result.message, EthDepositMessage)


def test_wait_for_l2_redeemed_retryable(abis, local_network, l2_w3):
    receipt = _retryable_receipt(abis, local_network)

    with patch.object(L1ToL2Message, "wait_for_status", return_value=L1ToL2MessageStatus.REDEEMED):
        result = receipt.wait_for_l2(l2_w3)

    assert result.complete
    assert result.status == L1ToL2MessageStatus.REDEEMED
    assert result.message.message_number == 5


def test_wait_for_l2_unredeemed_retryable_is_incomplete(abis, local_network, l2_w3):
    receipt = _retryable_receipt(abis, local_network)

    with patch.object(L1ToL2Message, "wait_for_status", return_value=L1ToL2MessageStatus.FUNDS_DEPOSITED_ON_L2):
        result = receipt.wait_for_l2(l2_w3)

    assert not result.complete
    assert result.status == L1ToL2MessageStatus.FUNDS_DEPOSITED_ON_L2


def test_wait_for_l2_funds_only_retryable_is_complete(abis, local_network, l2_w3):
    """A ticket with no gas and no calldata has nothing left to execute once funded."""
    receipt = _retryable_receipt(abis, local_network, gas_limit=0, data=b"")

    with patch.object(L1ToL2Message, "wait_for_status", return_value=L1ToL2MessageStatus.FUNDS_DEPOSITED_ON_L2):
        result = receipt.wait_for_l2(l2_w3)

    assert result.complete


def test_wait_for_l2_without_messages_raises(l2_w3):
    receipt = L1TransactionReceipt(build_receipt([]))

    with pytest.raises(TransactionReceiptError, match="sent no message to L2"):
        receipt.wait_for_l2(l2_w3)


def test_get_l2_to_l1_events(abis):
    caller = Web3.to_checksum_address("0x" + "a1" * 20)
    args = {
        "caller": caller,
        "destination": DESTINATION,
        "hash": 123,
        "position": 2**64 + 1,
        "arbBlockNum": 100,
        "ethBlockNum": 90,
        "timestamp": 1_700_000_000,
        "callvalue": 10**18,
        "data": b"",
    }
    arb_sys_log = build_log(abis["arb_sys_abi"], "L2ToL1Tx", ARB_SYS_ADDRESS, args, 0)
    # Same event shape from another contract is not a withdrawal
    spoofed_log = build_log(abis["arb_sys_abi"], "L2ToL1Tx", L1_GATEWAY, args, 1)

    receipt = L2TransactionReceipt(build_receipt([arb_sys_log, spoofed_log]))
    events = receipt.get_l2_to_l1_events()

    assert len(events) == 1
    event = events[0]
    assert event.caller == caller
    assert event.destination == DESTINATION
    assert event.hash == 123
    assert event.position == 2**64 + 1
    assert event.arb_block_num == 100
    assert event.eth_block_num == 90
    assert event.callvalue == 10**18
    assert event.data == b""
