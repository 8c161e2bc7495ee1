"""Builders for raw receipt logs, so event decoding can be tested without a node."""

from eth_abi import encode
from hexbytes import HexBytes
from web3 import Web3

TX_HASH = HexBytes("0x" + "ab" * 32)
BLOCK_HASH = HexBytes("0x" + "cd" * 32)


def build_log(abi: list, event_name: str, address: str, args: dict, log_index: int = 0) -> dict:
    event_abi = next(item for item in abi if item.get("type") == "event" and item["name"] == event_name)
    types = ",".join(i["type"] for i in event_abi["inputs"])

    topics = [HexBytes(Web3.keccak(text=f"{event_name}({types})"))]
    data_types = []
    data_values = []
    for inp in event_abi["inputs"]:
        if inp["indexed"]:
            topics.append(HexBytes(encode([inp["type"]], [args[inp["name"]]])))
        else:
            data_types.append(inp["type"])
            data_values.append(args[inp["name"]])

    return {
        "address": Web3.to_checksum_address(address),
        "topics": topics,
        "data": HexBytes(encode(data_types, data_values)),
        "logIndex": log_index,
        "transactionIndex": 0,
        "transactionHash": TX_HASH,
        "blockHash": BLOCK_HASH,
        "blockNumber": 1,
        "removed": False,
    }


def build_receipt(logs: list, status: int = 1, tx_hash: HexBytes = TX_HASH) -> dict:
    return {
        "transactionHash": tx_hash,
        "blockNumber": 1,
        "status": status,
        "logs": logs,
        "contractAddress": None,
    }
