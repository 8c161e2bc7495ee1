"""Transaction utility functions shared by the bridging actions."""

import logging
from typing import Any, Optional

from hexbytes import HexBytes
from web3 import Web3
from web3.types import TxReceipt

from arb_bridge.exceptions import TransactionFailedError, TransactionReceiptError
from arb_bridge.utils.artifacts import load_artifact

logger = logging.getLogger("arb_bridge.transactions")


def send_transaction(w3: Web3, account: Any, fn: Any, value: int = 0, gas: Optional[int] = None) -> TxReceipt:
    """Build, sign and send a contract call (or constructor), then wait for it to be mined.

    Args:
        w3: Web3 instance of the chain the transaction is sent to
        account: Local account signing the transaction
        fn: Bound contract function or constructor
        value: Wei attached to the call
        gas: Optional gas limit; estimated by the node when omitted

    Returns:
        TxReceipt: Receipt of the mined transaction

    Raises:
        TransactionFailedError: If the transaction was mined but reverted
    """
    tx_params: dict[str, Any] = {
        "from": account.address,
        "nonce": w3.eth.get_transaction_count(account.address),
        "chainId": w3.eth.chain_id,
    }
    if value:
        tx_params["value"] = value
    if gas is not None:
        tx_params["gas"] = gas

    tx = fn.build_transaction(tx_params)

    signed_tx = w3.eth.account.sign_transaction(tx, private_key=account.key)
    tx_hash = w3.eth.send_raw_transaction(signed_tx.raw_transaction)
    tx_receipt = w3.eth.wait_for_transaction_receipt(tx_hash)

    if tx_receipt["status"] != 1:
        raise TransactionFailedError(f"Transaction {HexBytes(tx_hash).to_0x_hex()} reverted")

    logger.debug(f"Mined {HexBytes(tx_hash).to_0x_hex()} in block {tx_receipt['blockNumber']}")
    return tx_receipt  # type: ignore[no-any-return]


def deploy_contract(w3: Web3, account: Any, artifact_name: str, *args: Any, artifacts_dir: Optional[str] = None):
    """Deploy a compiled contract and return a contract object bound to its address."""
    abi, bytecode = load_artifact(artifact_name, artifacts_dir)
    factory = w3.eth.contract(abi=abi, bytecode=bytecode)

    tx_receipt = send_transaction(w3, account, factory.constructor(*args))
    address = tx_receipt["contractAddress"]
    if address is None:
        raise TransactionReceiptError(f"Deployment of {artifact_name} did not create a contract")

    return w3.eth.contract(address=address, abi=abi)


def event_signature(abi: list, event_name: str) -> str:
    for item in abi:
        if item.get("type") == "event" and item.get("name") == event_name:
            types = ",".join(i["type"] for i in item["inputs"])
            return f"{event_name}({types})"
    raise TransactionReceiptError(f"Event {event_name} not found in ABI")


def decode_events(tx_receipt: Any, contract: Any, event_name: str, address: Optional[str] = None) -> list:
    """Decode every log of `event_name` in a receipt.

    Args:
        tx_receipt: Transaction receipt containing logs
        contract: Contract object whose ABI declares the event
        event_name: Name of the event to decode
        address: Only decode logs emitted by this address when given

    Returns:
        list: Decoded events, in log order
    """
    # Compute event signature for filtering relevant logs
    event_sig = HexBytes(Web3.keccak(text=event_signature(contract.abi, event_name)))

    filtered_logs = [
        log
        for log in tx_receipt["logs"]
        if log["topics"]
        and HexBytes(log["topics"][0]) == event_sig
        and (address is None or log["address"].lower() == address.lower())
    ]

    event = getattr(contract.events, event_name)()
    return [event.process_log(log) for log in filtered_logs]
