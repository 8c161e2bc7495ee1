from unittest.mock import MagicMock, patch

import pytest
from hexbytes import HexBytes
from web3 import Web3

from arb_bridge.exceptions import TransactionFailedError, TransactionReceiptError
from arb_bridge.utils import decode_events, deploy_contract, send_transaction
from tests.event_logs import build_log, build_receipt

TX_HASH = HexBytes("0x" + "12" * 32)


def _mock_w3(status=1):
    w3 = MagicMock()
    w3.eth.get_transaction_count.return_value = 7
    w3.eth.chain_id = 412346
    w3.eth.send_raw_transaction.return_value = TX_HASH
    w3.eth.wait_for_transaction_receipt.return_value = {
        "transactionHash": TX_HASH,
        "status": status,
        "blockNumber": 10,
        "contractAddress": None,
    }
    return w3


def test_send_transaction_builds_signs_and_waits(account):
    w3 = _mock_w3()
    fn = MagicMock()
    fn.build_transaction.return_value = {"to": "0x00", "data": "0x"}

    receipt = send_transaction(w3, account, fn, value=5)

    fn.build_transaction.assert_called_once_with(
        {"from": account.address, "nonce": 7, "chainId": 412346, "value": 5}
    )
    w3.eth.account.sign_transaction.assert_called_once_with({"to": "0x00", "data": "0x"}, private_key=account.key)
    w3.eth.send_raw_transaction.assert_called_once_with(w3.eth.account.sign_transaction.return_value.raw_transaction)
    w3.eth.wait_for_transaction_receipt.assert_called_once_with(TX_HASH)
    assert receipt["status"] == 1


def test_send_transaction_omits_zero_value_and_passes_gas(account):
    w3 = _mock_w3()
    fn = MagicMock()

    send_transaction(w3, account, fn, gas=21000)

    fn.build_transaction.assert_called_once_with(
        {"from": account.address, "nonce": 7, "chainId": 412346, "gas": 21000}
    )


def test_send_transaction_raises_on_revert(account):
    w3 = _mock_w3(status=0)

    with pytest.raises(TransactionFailedError, match=TX_HASH.to_0x_hex()):
        send_transaction(w3, account, MagicMock())


def test_deploy_contract_binds_to_created_address(account):
    w3 = MagicMock()
    contract_address = Web3.to_checksum_address("0x" + "c0" * 20)
    abi = [{"type": "constructor", "inputs": [{"name": "_greeting", "type": "string"}]}]

    with patch("arb_bridge.utils.transaction_utils.load_artifact", return_value=(abi, "0x6080")), patch(
        "arb_bridge.utils.transaction_utils.send_transaction",
        return_value={"status": 1, "contractAddress": contract_address},
    ) as mock_send:
        deploy_contract(w3, account, "Greeter", "hello")

    w3.eth.contract.assert_any_call(abi=abi, bytecode="0x6080")
    factory = w3.eth.contract.return_value
    factory.constructor.assert_called_once_with("hello")
    assert mock_send.call_args.args[2] is factory.constructor.return_value
    w3.eth.contract.assert_called_with(address=contract_address, abi=abi)


def test_deploy_contract_without_address_raises(account):
    with patch("arb_bridge.utils.transaction_utils.load_artifact", return_value=([], "0x6080")), patch(
        "arb_bridge.utils.transaction_utils.send_transaction",
        return_value={"status": 1, "contractAddress": None},
    ):
        with pytest.raises(TransactionReceiptError, match="did not create a contract"):
            deploy_contract(MagicMock(), account, "Greeter")


def test_decode_events_filters_by_topic_and_address(abis):
    erc20 = Web3().eth.contract(abi=abis["erc20_abi"])
    token = Web3.to_checksum_address("0x" + "70" * 20)
    other = Web3.to_checksum_address("0x" + "71" * 20)
    owner = Web3.to_checksum_address("0x" + "a1" * 20)
    spender = Web3.to_checksum_address("0x" + "b2" * 20)

    receipt = build_receipt(
        [
            build_log(abis["erc20_abi"], "Approval", token, {"owner": owner, "spender": spender, "value": 5}, 0),
            build_log(abis["erc20_abi"], "Transfer", token, {"from": owner, "to": spender, "value": 3}, 1),
            build_log(abis["erc20_abi"], "Transfer", other, {"from": owner, "to": spender, "value": 4}, 2),
        ]
    )

    transfers = decode_events(receipt, erc20, "Transfer")
    assert [event["args"]["value"] for event in transfers] == [3, 4]

    from_token = decode_events(receipt, erc20, "Transfer", address=token)
    assert len(from_token) == 1
    assert from_token[0]["args"]["to"] == spender


def test_decode_unknown_event_raises(abis):
    erc20 = Web3().eth.contract(abi=abis["erc20_abi"])
    with pytest.raises(TransactionReceiptError, match="not found in ABI"):
        decode_events(build_receipt([]), erc20, "Deposit")
