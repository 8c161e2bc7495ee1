from unittest.mock import patch

from web3 import Web3

from arb_bridge.actions import EthDepositParams, EthWithdrawParams, deposit_eth, withdraw_eth
from arb_bridge.message import L1TransactionReceipt, L2TransactionReceipt
from tests.event_logs import build_receipt


def test_deposit_eth(mock_config, account):
    receipt = build_receipt([])
    inbox = mock_config["w3contracts"]["inbox"]

    with patch("arb_bridge.actions.eth_bridger.send_transaction", return_value=receipt) as mock_send:
        result = deposit_eth(mock_config, EthDepositParams(amount=Web3.to_wei(10, "ether")))

    mock_send.assert_called_once_with(
        mock_config["l1_w3"], account, inbox.functions.depositEth.return_value, value=Web3.to_wei(10, "ether")
    )
    inbox.functions.depositEth.assert_called_once_with()
    assert isinstance(result["transaction_receipt"], L1TransactionReceipt)
    assert result["transaction_receipt"].receipt is receipt


def test_withdraw_eth_defaults_to_signer(mock_config, account):
    arb_sys = mock_config["w3contracts"]["arb_sys"]

    with patch("arb_bridge.actions.eth_bridger.send_transaction", return_value=build_receipt([])) as mock_send:
        result = withdraw_eth(mock_config, EthWithdrawParams(amount=Web3.to_wei(1, "ether")))

    arb_sys.functions.withdrawEth.assert_called_once_with(account.address)
    mock_send.assert_called_once_with(
        mock_config["l2_w3"], account, arb_sys.functions.withdrawEth.return_value, value=Web3.to_wei(1, "ether")
    )
    assert isinstance(result["transaction_receipt"], L2TransactionReceipt)


def test_withdraw_eth_to_destination(mock_config):
    destination = Web3.to_checksum_address("0x" + "d1" * 20)
    arb_sys = mock_config["w3contracts"]["arb_sys"]

    with patch("arb_bridge.actions.eth_bridger.send_transaction", return_value=build_receipt([])):
        withdraw_eth(mock_config, EthWithdrawParams(amount=1, destination_address=destination))

    arb_sys.functions.withdrawEth.assert_called_once_with(destination)
