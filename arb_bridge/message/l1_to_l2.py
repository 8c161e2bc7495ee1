"""
Readers for messages sent from L1 to L2 through the delayed inbox.

Two kinds of messages are tracked:

- retryable tickets (message kind 9), created by `createRetryableTicket` and by
  the token gateways. On L2 the ticket is created by a transaction whose hash
  can be computed from the L1 event data, and is then (auto-)redeemed by a
  separate retry transaction.
- ETH deposits (message kind 12), created by `Inbox.depositEth`. These become a
  single L2 deposit transaction whose hash can be computed the same way.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Optional

import rlp
from eth_abi import decode
from hexbytes import HexBytes
from web3 import Web3
from web3.exceptions import ContractLogicError, TransactionNotFound
from web3.types import TxReceipt

from arb_bridge.config import load_contract_abis
from arb_bridge.consts import (
    ARB_RETRYABLE_TX_ADDRESS,
    DEFAULT_MESSAGE_TIMEOUT_SECONDS,
    DEFAULT_POLL_INTERVAL_SECONDS,
    ETH_DEPOSIT_TX_TYPE,
    SUBMIT_RETRYABLE_TX_TYPE,
)
from arb_bridge.exceptions import MessageTimeoutError, TransactionReceiptError
from arb_bridge.types import EthDepositStatus, L1ToL2MessageStatus
from arb_bridge.utils.transaction_utils import decode_events, event_signature, send_transaction

logger = logging.getLogger("arb_bridge.messages")

_WORD = 32
_RETRYABLE_HEADER_WORDS = 9


@dataclass
class SubmitRetryableData:
    """Retryable ticket parameters, as packed into the `InboxMessageDelivered` event."""

    dest_address: str
    l2_call_value: int
    l1_value: int  # Deposit sent along with the ticket
    max_submission_fee: int
    excess_fee_refund_address: str
    call_value_refund_address: str
    gas_limit: int
    max_fee_per_gas: int
    data: bytes


def _format_number(value: int) -> bytes:
    # Minimal big-endian; zero encodes as empty bytes
    return value.to_bytes((value.bit_length() + 7) // 8, "big")


def _address_bytes(address: str) -> bytes:
    return bytes(HexBytes(Web3.to_checksum_address(address)))


def _word_to_address(word: int) -> str:
    return Web3.to_checksum_address("0x" + word.to_bytes(_WORD, "big")[-20:].hex())


def parse_submit_retryable_data(data: Any) -> SubmitRetryableData:
    """Decode the packed payload of a submit-retryable inbox message.

    The payload is nine 32-byte words (destination, L2 call value, deposit,
    max submission fee, excess fee refund address, call value refund address,
    gas limit, max fee per gas, calldata length) followed by the calldata.
    """
    data = bytes(HexBytes(data))
    header_size = _RETRYABLE_HEADER_WORDS * _WORD
    if len(data) < header_size:
        raise TransactionReceiptError(f"Retryable message data too short: {len(data)} bytes")

    words = decode(["uint256"] * _RETRYABLE_HEADER_WORDS, data[:header_size])
    call_data_length = words[8]
    call_data = data[header_size : header_size + call_data_length]
    if len(call_data) != call_data_length:
        raise TransactionReceiptError(
            f"Retryable calldata truncated: expected {call_data_length} bytes, got {len(call_data)}"
        )

    return SubmitRetryableData(
        dest_address=_word_to_address(words[0]),
        l2_call_value=words[1],
        l1_value=words[2],
        max_submission_fee=words[3],
        excess_fee_refund_address=_word_to_address(words[4]),
        call_value_refund_address=_word_to_address(words[5]),
        gas_limit=words[6],
        max_fee_per_gas=words[7],
        data=call_data,
    )


def parse_eth_deposit_data(data: Any) -> tuple[str, int]:
    """Decode an ETH deposit inbox message: packed (address to, uint256 value)."""
    data = bytes(HexBytes(data))
    if len(data) < 20:
        raise TransactionReceiptError(f"ETH deposit message data too short: {len(data)} bytes")
    to_address = Web3.to_checksum_address("0x" + data[:20].hex())
    value = int.from_bytes(data[20:], "big")
    return to_address, value


def calculate_submit_retryable_id(
    l2_chain_id: int,
    from_address: str,
    message_number: int,
    l1_base_fee: int,
    message: SubmitRetryableData,
) -> HexBytes:
    """Hash of the L2 transaction that creates the retryable ticket."""
    dest = b"" if int(message.dest_address, 16) == 0 else _address_bytes(message.dest_address)
    fields = [
        _format_number(l2_chain_id),
        message_number.to_bytes(_WORD, "big"),
        _address_bytes(from_address),
        _format_number(l1_base_fee),
        _format_number(message.l1_value),
        _format_number(message.max_fee_per_gas),
        _format_number(message.gas_limit),
        dest,
        _format_number(message.l2_call_value),
        _address_bytes(message.call_value_refund_address),
        _format_number(message.max_submission_fee),
        _address_bytes(message.excess_fee_refund_address),
        bytes(message.data),
    ]
    encoded = bytes([SUBMIT_RETRYABLE_TX_TYPE]) + rlp.encode(fields)
    return HexBytes(Web3.keccak(encoded))


def calculate_deposit_tx_id(
    l2_chain_id: int,
    message_number: int,
    from_address: str,
    to_address: str,
    value: int,
) -> HexBytes:
    """Hash of the L2 transaction that credits an ETH deposit."""
    fields = [
        _format_number(l2_chain_id),
        message_number.to_bytes(_WORD, "big"),
        _address_bytes(from_address),
        _address_bytes(to_address),
        _format_number(value),
    ]
    encoded = bytes([ETH_DEPOSIT_TX_TYPE]) + rlp.encode(fields)
    return HexBytes(Web3.keccak(encoded))


def _get_receipt(w3: Web3, tx_hash: HexBytes) -> Optional[TxReceipt]:
    try:
        return w3.eth.get_transaction_receipt(tx_hash)
    except TransactionNotFound:
        return None


class L1ToL2Message:
    """A retryable ticket sent from L1, read from the L2 side."""

    def __init__(
        self,
        l2_w3: Web3,
        chain_id: int,
        sender: str,
        message_number: int,
        l1_base_fee: int,
        message_data: SubmitRetryableData,
    ):
        self.l2_w3 = l2_w3
        self.chain_id = chain_id
        self.sender = sender
        self.message_number = message_number
        self.l1_base_fee = l1_base_fee
        self.message_data = message_data
        self.retryable_creation_id = calculate_submit_retryable_id(
            chain_id, sender, message_number, l1_base_fee, message_data
        )
        # Set once a successful redeem has been observed
        self.l2_tx_hash: Optional[HexBytes] = None
        self._manual_redeem_receipt: Optional[TxReceipt] = None

        abis = load_contract_abis()
        self.arb_retryable_tx = l2_w3.eth.contract(
            address=Web3.to_checksum_address(ARB_RETRYABLE_TX_ADDRESS), abi=abis["arb_retryable_tx_abi"]
        )

    def __repr__(self) -> str:
        return (
            f"L1ToL2Message(message_number={self.message_number}, "
            f"retryable_creation_id={self.retryable_creation_id.to_0x_hex()})"
        )

    def get_retryable_creation_receipt(self) -> Optional[TxReceipt]:
        return _get_receipt(self.l2_w3, self.retryable_creation_id)

    def get_auto_redeem_attempt(self, creation_receipt: TxReceipt) -> Optional[TxReceipt]:
        """Receipt of the retry transaction scheduled alongside the ticket's creation, if any."""
        events = decode_events(creation_receipt, self.arb_retryable_tx, "RedeemScheduled")
        for event in events:
            if HexBytes(event["args"]["ticketId"]) == self.retryable_creation_id:
                return _get_receipt(self.l2_w3, HexBytes(event["args"]["retryTxHash"]))
        return None

    def get_timeout(self) -> int:
        """Timestamp at which the ticket expires; reverts once it is redeemed, cancelled or expired."""
        return int(self.arb_retryable_tx.functions.getTimeout(self.retryable_creation_id).call())

    def get_successful_redeem(self, from_block: int) -> Optional[TxReceipt]:
        """Search L2 for a retry of this ticket that succeeded, whoever scheduled it."""
        event_topic = HexBytes(Web3.keccak(text=event_signature(self.arb_retryable_tx.abi, "RedeemScheduled")))
        logs = self.l2_w3.eth.get_logs(
            {
                "address": self.arb_retryable_tx.address,
                "topics": [event_topic.to_0x_hex(), self.retryable_creation_id.to_0x_hex()],
                "fromBlock": from_block,
                "toBlock": "latest",
            }
        )

        for event in decode_events({"logs": logs}, self.arb_retryable_tx, "RedeemScheduled"):
            if HexBytes(event["args"]["ticketId"]) != self.retryable_creation_id:
                continue
            retry_receipt = _get_receipt(self.l2_w3, HexBytes(event["args"]["retryTxHash"]))
            if retry_receipt is not None and retry_receipt["status"] == 1:
                return retry_receipt
        return None

    def status(self) -> L1ToL2MessageStatus:
        creation_receipt = self.get_retryable_creation_receipt()
        if creation_receipt is None:
            return L1ToL2MessageStatus.NOT_YET_CREATED
        if creation_receipt["status"] != 1:
            return L1ToL2MessageStatus.CREATION_FAILED

        redeem_receipt = self.get_auto_redeem_attempt(creation_receipt) or self._manual_redeem_receipt
        if redeem_receipt is not None and redeem_receipt["status"] == 1:
            self.l2_tx_hash = HexBytes(redeem_receipt["transactionHash"])
            return L1ToL2MessageStatus.REDEEMED

        try:
            timeout = self.get_timeout()
        except ContractLogicError:
            # Gone: expired or cancelled, unless another caller redeemed it
            timeout = 0

        if timeout > 0:
            return L1ToL2MessageStatus.FUNDS_DEPOSITED_ON_L2

        redeem_receipt = self.get_successful_redeem(creation_receipt["blockNumber"])
        if redeem_receipt is not None:
            self.l2_tx_hash = HexBytes(redeem_receipt["transactionHash"])
            return L1ToL2MessageStatus.REDEEMED
        return L1ToL2MessageStatus.EXPIRED


    def wait_for_status(
        self,
        timeout: float = DEFAULT_MESSAGE_TIMEOUT_SECONDS,
        poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
    ) -> L1ToL2MessageStatus:
        """Poll L2 until the ticket has been created, then return its status.

        Raises:
            MessageTimeoutError: If the ticket is not created within `timeout` seconds.
        """
        start_time = time.time()
        while True:
            status = self.status()
            if status != L1ToL2MessageStatus.NOT_YET_CREATED:
                logger.info(f"Retryable {self.retryable_creation_id.to_0x_hex()} status: {status.name}")
                return status

            elapsed = time.time() - start_time
            if elapsed >= timeout:
                raise MessageTimeoutError(
                    f"Retryable {self.retryable_creation_id.to_0x_hex()} not created on L2 after {elapsed:.0f}s"
                )
            time.sleep(poll_interval)

    def redeem(self, account: Any) -> TxReceipt:
        """Manually redeem a ticket whose auto-redeem did not succeed."""
        tx_receipt = send_transaction(
            self.l2_w3, account, self.arb_retryable_tx.functions.redeem(self.retryable_creation_id)
        )

        for event in decode_events(tx_receipt, self.arb_retryable_tx, "RedeemScheduled"):
            if HexBytes(event["args"]["ticketId"]) == self.retryable_creation_id:
                retry_hash = HexBytes(event["args"]["retryTxHash"])
                self._manual_redeem_receipt = self.l2_w3.eth.wait_for_transaction_receipt(retry_hash)
                if self._manual_redeem_receipt["status"] == 1:
                    self.l2_tx_hash = retry_hash
                break
        else:
            raise TransactionReceiptError("Redeem transaction did not schedule a retry for this ticket")

        logger.info(f"Redeemed retryable {self.retryable_creation_id.to_0x_hex()}")
        return tx_receipt

    def cancel(self, account: Any) -> TxReceipt:
        """Cancel the ticket; only its beneficiary may do this."""
        tx_receipt = send_transaction(
            self.l2_w3, account, self.arb_retryable_tx.functions.cancel(self.retryable_creation_id)
        )
        logger.info(f"Cancelled retryable {self.retryable_creation_id.to_0x_hex()}")
        return tx_receipt


class EthDepositMessage:
    """An ETH deposit sent from L1, read from the L2 side."""

    def __init__(
        self,
        l2_w3: Web3,
        chain_id: int,
        message_number: int,
        from_address: str,
        to_address: str,
        value: int,
    ):
        self.l2_w3 = l2_w3
        self.chain_id = chain_id
        self.message_number = message_number
        self.from_address = from_address
        self.to_address = to_address
        self.value = value
        self.l2_deposit_tx_hash = calculate_deposit_tx_id(chain_id, message_number, from_address, to_address, value)

    def __repr__(self) -> str:
        return (
            f"EthDepositMessage(message_number={self.message_number}, to={self.to_address}, "
            f"value={self.value}, l2_deposit_tx_hash={self.l2_deposit_tx_hash.to_0x_hex()})"
        )

    def status(self) -> EthDepositStatus:
        if _get_receipt(self.l2_w3, self.l2_deposit_tx_hash) is None:
            return EthDepositStatus.PENDING
        return EthDepositStatus.DEPOSITED

    def wait(
        self,
        timeout: float = DEFAULT_MESSAGE_TIMEOUT_SECONDS,
        poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
    ) -> TxReceipt:
        """Poll L2 until the deposit transaction is included and return its receipt."""
        start_time = time.time()
        while True:
            receipt = _get_receipt(self.l2_w3, self.l2_deposit_tx_hash)
            if receipt is not None:
                return receipt

            elapsed = time.time() - start_time
            if elapsed >= timeout:
                raise MessageTimeoutError(
                    f"ETH deposit {self.l2_deposit_tx_hash.to_0x_hex()} not seen on L2 after {elapsed:.0f}s"
                )
            time.sleep(poll_interval)
