import logging
from dataclasses import dataclass
from typing import Optional

from hexbytes import HexBytes

from arb_bridge.message.receipts import L1TransactionReceipt, L2TransactionReceipt
from arb_bridge.utils.transaction_utils import send_transaction

logger = logging.getLogger("arb_bridge.actions")


@dataclass
class EthDepositParams:
    """Data class to store ETH deposit parameters."""

    amount: int  # Amount of ETH to deposit (in wei)


@dataclass
class EthWithdrawParams:
    """Data class to store ETH withdrawal parameters."""

    amount: int  # Amount of ETH to withdraw (in wei)
    destination_address: Optional[str] = None  # L1 recipient, defaults to the signer


def deposit_eth(config: dict, params: EthDepositParams):
    """
    Deposits ETH from L1 to the same address on L2 through the Inbox.

    Args:
        config (dict): Configuration dictionary containing Web3 instances and contracts. Check out config.py for more details.
        params (EthDepositParams): Deposit parameters including the amount of ETH.

    Returns:
        dict: Contains the L1TransactionReceipt of the deposit transaction.
    """
    l1_w3 = config["l1_w3"]
    account = config["w3account"]
    inbox = config["w3contracts"]["inbox"]

    tx_receipt = send_transaction(l1_w3, account, inbox.functions.depositEth(), value=params.amount)
    logger.info(f"Deposit transaction on L1: {HexBytes(tx_receipt['transactionHash']).to_0x_hex()}")

    return {"transaction_receipt": L1TransactionReceipt(tx_receipt)}


def withdraw_eth(config: dict, params: EthWithdrawParams):
    """
    Initiates an ETH withdrawal from L2 to L1 through ArbSys.

    The funds can be claimed on L1 from the Outbox once the challenge period has passed.

    Args:
        config (dict): Configuration dictionary containing Web3 instances and contracts. Check out config.py for more details.
        params (EthWithdrawParams): Withdrawal parameters including the amount of ETH and L1 destination.

    Returns:
        dict: Contains the L2TransactionReceipt of the withdrawal transaction.
    """
    l2_w3 = config["l2_w3"]
    account = config["w3account"]
    arb_sys = config["w3contracts"]["arb_sys"]

    destination = params.destination_address or account.address

    tx_receipt = send_transaction(l2_w3, account, arb_sys.functions.withdrawEth(destination), value=params.amount)
    logger.info(f"Withdrawal transaction on L2: {HexBytes(tx_receipt['transactionHash']).to_0x_hex()}")

    return {"transaction_receipt": L2TransactionReceipt(tx_receipt)}
