import logging
from dataclasses import dataclass
from typing import Optional

from eth_abi import encode
from hexbytes import HexBytes
from web3 import Web3

from arb_bridge.consts import MAX_UINT256
from arb_bridge.message.gas_estimator import L1ToL2MessageGasEstimator, RetryableGasOverrides
from arb_bridge.message.receipts import L1TransactionReceipt, L2TransactionReceipt
from arb_bridge.utils.transaction_utils import send_transaction

logger = logging.getLogger("arb_bridge.actions")


@dataclass
class ApproveTokenParams:
    """Data class to store token approval parameters."""

    erc20_l1_address: str  # Token being bridged, on L1
    amount: int = MAX_UINT256  # Allowance granted to the token's L1 gateway


@dataclass
class TokenDepositParams:
    """Data class to store token deposit parameters."""

    erc20_l1_address: str  # Token being bridged, on L1
    amount: int  # Amount of tokens to deposit (in the token's base units)
    destination_address: Optional[str] = None  # L2 recipient, defaults to the signer
    retryable_gas_overrides: Optional[RetryableGasOverrides] = None


@dataclass
class TokenWithdrawParams:
    """Data class to store token withdrawal parameters."""

    erc20_l1_address: str  # Token being bridged, on L1
    amount: int  # Amount of tokens to withdraw (in the token's base units)
    destination_address: Optional[str] = None  # L1 recipient, defaults to the signer


def get_l1_gateway_address(config: dict, erc20_l1_address: str) -> str:
    """Gateway the L1 router assigns to a token."""
    router = config["w3contracts"]["l1_gateway_router"]
    return Web3.to_checksum_address(router.functions.getGateway(Web3.to_checksum_address(erc20_l1_address)).call())


def get_l2_erc20_address(config: dict, erc20_l1_address: str) -> str:
    """Address of the token's L2 counterpart (it may not be deployed yet)."""
    router = config["w3contracts"]["l1_gateway_router"]
    return Web3.to_checksum_address(
        router.functions.calculateL2TokenAddress(Web3.to_checksum_address(erc20_l1_address)).call()
    )


def get_l2_token_contract(config: dict, l2_token_address: str):
    l2_w3 = config["l2_w3"]
    return l2_w3.eth.contract(address=Web3.to_checksum_address(l2_token_address), abi=config["abis"]["erc20_abi"])


def approve_token(config: dict, params: ApproveTokenParams):
    """
    Allows the token's L1 gateway to pull tokens from the signer.

    Args:
        config (dict): Configuration dictionary containing Web3 instances and contracts. Check out config.py for more details.
        params (ApproveTokenParams): Token address and allowance.

    Returns:
        dict: Contains transaction receipt of the approval transaction.
    """
    l1_w3 = config["l1_w3"]
    account = config["w3account"]

    gateway_address = get_l1_gateway_address(config, params.erc20_l1_address)
    token = l1_w3.eth.contract(
        address=Web3.to_checksum_address(params.erc20_l1_address), abi=config["abis"]["erc20_abi"]
    )

    tx_receipt = send_transaction(l1_w3, account, token.functions.approve(gateway_address, params.amount))
    logger.info(f"Approved {gateway_address} to spend token: {HexBytes(tx_receipt['transactionHash']).to_0x_hex()}")

    return {"transaction_receipt": tx_receipt}


def deposit_token(config: dict, params: TokenDepositParams):
    """
    Deposits ERC-20 tokens from L1 to L2 through the gateway router.

    The router forwards the tokens to the token's gateway, which escrows them
    and sends a retryable ticket to its L2 counterpart to mint them there.

    Args:
        config (dict): Configuration dictionary containing Web3 instances and contracts. Check out config.py for more details.
        params (TokenDepositParams): Deposit parameters including token address, amount and L2 destination.

    Returns:
        dict: Contains the L1TransactionReceipt of the deposit transaction.
    """
    l1_w3 = config["l1_w3"]
    l2_w3 = config["l2_w3"]
    account = config["w3account"]
    router = config["w3contracts"]["l1_gateway_router"]

    token_address = Web3.to_checksum_address(params.erc20_l1_address)
    destination = params.destination_address or account.address

    # The retryable is sent by the gateway, carrying its outbound calldata to the L2 counterpart
    gateway_address = get_l1_gateway_address(config, token_address)
    gateway = l1_w3.eth.contract(address=gateway_address, abi=config["abis"]["l1_erc20_gateway_abi"])
    outbound_calldata = gateway.functions.getOutboundCalldata(
        token_address, account.address, destination, params.amount, b""
    ).call()
    l2_counterpart = gateway.functions.counterpartGateway().call()

    l1_base_fee = l1_w3.eth.get_block("latest")["baseFeePerGas"]

    estimator = L1ToL2MessageGasEstimator(l2_w3, config["l2_network"])
    estimates = estimator.estimate_all(
        l1_w3,
        sender=gateway_address,
        destination=l2_counterpart,
        calldata=outbound_calldata,
        l2_call_value=0,
        l1_base_fee=l1_base_fee,
        excess_fee_refund_address=destination,
        call_value_refund_address=destination,
        options=params.retryable_gas_overrides,
    )

    data = encode(["uint256", "bytes"], [estimates.max_submission_fee, b""])
    tx_receipt = send_transaction(
        l1_w3,
        account,
        router.functions.outboundTransfer(
            token_address,
            destination,
            params.amount,
            estimates.gas_limit,
            estimates.max_fee_per_gas,
            data,
        ),
        value=estimates.deposit,
    )
    logger.info(f"Deposit transaction on L1: {HexBytes(tx_receipt['transactionHash']).to_0x_hex()}")

    return {"transaction_receipt": L1TransactionReceipt(tx_receipt)}


def withdraw_token(config: dict, params: TokenWithdrawParams):
    """
    Initiates an ERC-20 withdrawal from L2 to L1 through the L2 gateway router.

    Args:
        config (dict): Configuration dictionary containing Web3 instances and contracts. Check out config.py for more details.
        params (TokenWithdrawParams): Withdrawal parameters including L1 token address, amount and L1 destination.

    Returns:
        dict: Contains the L2TransactionReceipt of the withdrawal transaction.
    """
    l2_w3 = config["l2_w3"]
    account = config["w3account"]
    router = config["w3contracts"]["l2_gateway_router"]

    destination = params.destination_address or account.address

    tx_receipt = send_transaction(
        l2_w3,
        account,
        router.functions.outboundTransfer(
            Web3.to_checksum_address(params.erc20_l1_address), destination, params.amount, b""
        ),
    )
    logger.info(f"Withdrawal transaction on L2: {HexBytes(tx_receipt['transactionHash']).to_0x_hex()}")

    return {"transaction_receipt": L2TransactionReceipt(tx_receipt)}
