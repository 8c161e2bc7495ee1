"""Wrappers around L1 / L2 transaction receipts that know how to read bridge events."""

import logging
from dataclasses import dataclass
from typing import Any, Optional, Union

from hexbytes import HexBytes
from web3 import Web3
from web3.types import TxReceipt

from arb_bridge.config import load_contract_abis
from arb_bridge.consts import ARB_SYS_ADDRESS, DEFAULT_MESSAGE_TIMEOUT_SECONDS, DEFAULT_POLL_INTERVAL_SECONDS
from arb_bridge.exceptions import TransactionReceiptError
from arb_bridge.message.l1_to_l2 import (
    EthDepositMessage,
    L1ToL2Message,
    parse_eth_deposit_data,
    parse_submit_retryable_data,
)
from arb_bridge.types import EthDepositStatus, InboxMessageKind, L1ToL2MessageStatus
from arb_bridge.utils.transaction_utils import decode_events

logger = logging.getLogger("arb_bridge.receipts")


@dataclass
class MessageEvents:
    """A Bridge `MessageDelivered` event and the Inbox event carrying its payload."""

    message_number: int
    kind: int
    sender: str  # Already aliased by the Bridge
    base_fee_l1: int
    data: bytes
    inbox: str


@dataclass
class L1ToL2WaitResult:
    complete: bool
    status: Union[L1ToL2MessageStatus, EthDepositStatus]
    message: Union[L1ToL2Message, EthDepositMessage]
    l2_tx_receipt: Optional[TxReceipt] = None


@dataclass
class L2ToL1TxEvent:
    caller: str
    destination: str
    hash: int
    position: int
    arb_block_num: int
    eth_block_num: int
    timestamp: int
    callvalue: int
    data: bytes


def _decoding_contract(abi: list):
    # Only used to decode logs, so no provider is needed
    return Web3().eth.contract(abi=abi)


class L1TransactionReceipt:
    """An L1 receipt that may have sent messages to L2."""

    def __init__(self, receipt: Any):
        self.receipt = receipt
        abis = load_contract_abis()
        self._bridge = _decoding_contract(abis["bridge_abi"])
        self._inbox = _decoding_contract(abis["inbox_abi"])

    def __getitem__(self, key: str) -> Any:
        return self.receipt[key]

    @property
    def transaction_hash(self) -> HexBytes:
        return HexBytes(self.receipt["transactionHash"])

    @property
    def status(self) -> int:
        return int(self.receipt["status"])

    def get_message_events(self) -> list[MessageEvents]:
        """Pair every Bridge `MessageDelivered` with the `InboxMessageDelivered` of the same number."""
        bridge_events = decode_events(self.receipt, self._bridge, "MessageDelivered")
        inbox_events = decode_events(self.receipt, self._inbox, "InboxMessageDelivered")

        payloads = {int(event["args"]["messageNum"]): bytes(event["args"]["data"]) for event in inbox_events}

        messages = []
        for event in bridge_events:
            args = event["args"]
            message_number = int(args["messageIndex"])
            if message_number not in payloads:
                raise TransactionReceiptError(f"No inbox message data found for message {message_number}")
            messages.append(
                MessageEvents(
                    message_number=message_number,
                    kind=int(args["kind"]),
                    sender=Web3.to_checksum_address(args["sender"]),
                    base_fee_l1=int(args["baseFeeL1"]),
                    data=payloads[message_number],
                    inbox=Web3.to_checksum_address(args["inbox"]),
                )
            )
        return messages

    def get_l1_to_l2_messages(self, l2_w3: Web3) -> list[L1ToL2Message]:
        """Retryable tickets created by this transaction."""
        chain_id = int(l2_w3.eth.chain_id)
        return [
            L1ToL2Message(
                l2_w3,
                chain_id,
                event.sender,
                event.message_number,
                event.base_fee_l1,
                parse_submit_retryable_data(event.data),
            )
            for event in self.get_message_events()
            if event.kind == InboxMessageKind.L1_MESSAGE_TYPE_SUBMIT_RETRYABLE_TX
        ]

    def get_l1_to_l2_message(self, l2_w3: Web3, index: int = 0) -> L1ToL2Message:
        messages = self.get_l1_to_l2_messages(l2_w3)
        if index >= len(messages):
            raise TransactionReceiptError(
                f"Transaction {self.transaction_hash.to_0x_hex()} has {len(messages)} retryable(s), "
                f"index {index} requested"
            )
        return messages[index]

    def get_eth_deposits(self, l2_w3: Web3) -> list[EthDepositMessage]:
        """ETH deposits made by this transaction."""
        chain_id = int(l2_w3.eth.chain_id)
        deposits = []
        for event in self.get_message_events():
            if event.kind != InboxMessageKind.L1_MESSAGE_TYPE_ETH_DEPOSIT:
                continue
            to_address, value = parse_eth_deposit_data(event.data)
            deposits.append(EthDepositMessage(l2_w3, chain_id, event.message_number, event.sender, to_address, value))
        return deposits

    def wait_for_l2(
        self,
        l2_w3: Web3,
        timeout: float = DEFAULT_MESSAGE_TIMEOUT_SECONDS,
        poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
    ) -> L1ToL2WaitResult:
        """
        Wait for the L2 side of the first message sent by this transaction.

        ETH deposits are waited on first; otherwise the first retryable ticket is.

        Returns:
            L1ToL2WaitResult: `complete` is True once the L2 side has fully
            executed (deposit credited, or ticket redeemed).

        Raises:
            TransactionReceiptError: If the transaction sent no L1 -> L2 message.
            MessageTimeoutError: If nothing shows up on L2 within `timeout` seconds.
        """
        eth_deposits = self.get_eth_deposits(l2_w3)
        if eth_deposits:
            deposit = eth_deposits[0]
            l2_tx_receipt = deposit.wait(timeout=timeout, poll_interval=poll_interval)
            return L1ToL2WaitResult(
                complete=l2_tx_receipt["status"] == 1,
                status=EthDepositStatus.DEPOSITED,
                message=deposit,
                l2_tx_receipt=l2_tx_receipt,
            )

        messages = self.get_l1_to_l2_messages(l2_w3)
        if not messages:
            raise TransactionReceiptError(f"Transaction {self.transaction_hash.to_0x_hex()} sent no message to L2")

        message = messages[0]
        status = message.wait_for_status(timeout=timeout, poll_interval=poll_interval)

        l2_tx_receipt = None
        if status == L1ToL2MessageStatus.REDEEMED and message.l2_tx_hash is not None:
            l2_tx_receipt = l2_w3.eth.get_transaction_receipt(message.l2_tx_hash)

        # A ticket with no gas and no calldata only moves funds; nothing is left to redeem
        funds_only = message.message_data.gas_limit == 0 and len(message.message_data.data) == 0
        complete = status == L1ToL2MessageStatus.REDEEMED or (
            status == L1ToL2MessageStatus.FUNDS_DEPOSITED_ON_L2 and funds_only
        )

        return L1ToL2WaitResult(complete=complete, status=status, message=message, l2_tx_receipt=l2_tx_receipt)


class L2TransactionReceipt:
    """An L2 receipt that may have sent messages to L1."""

    def __init__(self, receipt: Any):
        self.receipt = receipt
        self._arb_sys = _decoding_contract(load_contract_abis()["arb_sys_abi"])

    def __getitem__(self, key: str) -> Any:
        return self.receipt[key]

    @property
    def transaction_hash(self) -> HexBytes:
        return HexBytes(self.receipt["transactionHash"])

    @property
    def status(self) -> int:
        return int(self.receipt["status"])

    def get_l2_to_l1_events(self) -> list[L2ToL1TxEvent]:
        """`L2ToL1Tx` events emitted by ArbSys in this transaction."""
        events = decode_events(self.receipt, self._arb_sys, "L2ToL1Tx", address=ARB_SYS_ADDRESS)
        return [
            L2ToL1TxEvent(
                caller=event["args"]["caller"],
                destination=event["args"]["destination"],
                hash=int(event["args"]["hash"]),
                position=int(event["args"]["position"]),
                arb_block_num=int(event["args"]["arbBlockNum"]),
                eth_block_num=int(event["args"]["ethBlockNum"]),
                timestamp=int(event["args"]["timestamp"]),
                callvalue=int(event["args"]["callvalue"]),
                data=bytes(event["args"]["data"]),
            )
            for event in events
        ]
