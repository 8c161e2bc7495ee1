"""Fee estimation for retryable tickets (L1 -> L2 messages)."""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from hexbytes import HexBytes
from web3 import Web3

from arb_bridge.config import load_contract_abis
from arb_bridge.consts import (
    DEFAULT_GAS_LIMIT_PERCENT_INCREASE,
    DEFAULT_GAS_PRICE_PERCENT_INCREASE,
    DEFAULT_SENDER_DEPOSIT,
    DEFAULT_SUBMISSION_FEE_PERCENT_INCREASE,
    NODE_INTERFACE_ADDRESS,
)
from arb_bridge.networks import L2Network, get_l2_network

logger = logging.getLogger("arb_bridge.gas_estimator")


@dataclass
class PercentIncreaseOptions:
    """Override for one estimate: a fixed `base` value and/or the percentage added on top."""

    base: Optional[int] = None
    percent_increase: Optional[int] = None


@dataclass
class GasLimitOptions(PercentIncreaseOptions):
    min: int = 0  # Floor applied after the percent increase


@dataclass
class RetryableGasOverrides:
    gas_limit: Optional[GasLimitOptions] = None
    max_submission_fee: Optional[PercentIncreaseOptions] = None
    max_fee_per_gas: Optional[PercentIncreaseOptions] = None


@dataclass
class GasEstimates:
    """Everything needed to fund a retryable ticket."""

    gas_limit: int
    max_fee_per_gas: int
    max_submission_fee: int
    deposit: int  # Total callvalue to send on L1


def percent_increase(value: int, increase: int) -> int:
    return value + value * increase // 100


class L1ToL2MessageGasEstimator:
    """
    Estimates the three values a retryable ticket is paid with: the
    submission fee (charged on L1), the L2 gas limit and the L2 max fee per gas.
    """

    def __init__(self, l2_w3: Web3, l2_network: Optional[L2Network] = None):
        self.l2_w3 = l2_w3
        self._l2_network = l2_network

        abis = load_contract_abis()
        self._inbox_abi = abis["inbox_abi"]
        self.node_interface = l2_w3.eth.contract(
            address=Web3.to_checksum_address(NODE_INTERFACE_ADDRESS), abi=abis["node_interface_abi"]
        )

    @property
    def l2_network(self) -> L2Network:
        if self._l2_network is None:
            self._l2_network = get_l2_network(self.l2_w3)
        return self._l2_network

    def estimate_submission_fee(
        self,
        l1_w3: Web3,
        l1_base_fee: int,
        call_data_size: int,
        options: Optional[PercentIncreaseOptions] = None,
    ) -> int:
        """
        Query the base submission fee for a retryable carrying `call_data_size` bytes of calldata.

        Args:
            l1_w3 (Web3): L1 provider; the fee is computed by the Inbox contract.
            l1_base_fee (int): L1 base fee (or gas price) the fee is derived from.
            call_data_size (int): Length in bytes of the L2 calldata.
            options (PercentIncreaseOptions, optional): Fixed base and/or percent increase.

        Returns:
            int: Submission fee in wei, including the percent increase (300% by default).
        """
        options = options or PercentIncreaseOptions()
        increase = (
            DEFAULT_SUBMISSION_FEE_PERCENT_INCREASE if options.percent_increase is None else options.percent_increase
        )

        if options.base is not None:
            base = options.base
        else:
            inbox = l1_w3.eth.contract(address=self.l2_network.eth_bridge.inbox, abi=self._inbox_abi)
            base = inbox.functions.calculateRetryableSubmissionFee(call_data_size, l1_base_fee).call()

        return percent_increase(int(base), increase)

    def estimate_retryable_ticket_gas_limit(
        self,
        sender: str,
        destination: str,
        l2_call_value: int,
        excess_fee_refund_address: str,
        call_value_refund_address: str,
        calldata: Any,
        sender_deposit: int = DEFAULT_SENDER_DEPOSIT,
    ) -> int:
        """Estimate the L2 gas the retryable needs, by asking the NodeInterface precompile."""
        gas_limit = self.node_interface.functions.estimateRetryableTicket(
            sender,
            sender_deposit + l2_call_value,
            destination,
            l2_call_value,
            excess_fee_refund_address,
            call_value_refund_address,
            HexBytes(calldata),
        ).estimate_gas()
        return int(gas_limit)

    def estimate_max_fee_per_gas(self, options: Optional[PercentIncreaseOptions] = None) -> int:
        options = options or PercentIncreaseOptions()
        increase = DEFAULT_GAS_PRICE_PERCENT_INCREASE if options.percent_increase is None else options.percent_increase
        base = options.base if options.base is not None else self.l2_w3.eth.gas_price
        return percent_increase(int(base), increase)

    def estimate_all(
        self,
        l1_w3: Web3,
        sender: str,
        destination: str,
        calldata: Any,
        l2_call_value: int,
        l1_base_fee: int,
        excess_fee_refund_address: str,
        call_value_refund_address: str,
        options: Optional[RetryableGasOverrides] = None,
    ) -> GasEstimates:
        """Estimate gas limit, max fee per gas and submission fee, and the deposit that covers them."""
        options = options or RetryableGasOverrides()
        gas_limit_options = options.gas_limit or GasLimitOptions()
        calldata = HexBytes(calldata)

        max_fee_per_gas = self.estimate_max_fee_per_gas(options.max_fee_per_gas)
        max_submission_fee = self.estimate_submission_fee(l1_w3, l1_base_fee, len(calldata), options.max_submission_fee)

        if gas_limit_options.base is not None:
            gas_limit_base = gas_limit_options.base
        else:
            gas_limit_base = self.estimate_retryable_ticket_gas_limit(
                sender,
                destination,
                l2_call_value,
                excess_fee_refund_address,
                call_value_refund_address,
                calldata,
            )
        increase = (
            DEFAULT_GAS_LIMIT_PERCENT_INCREASE
            if gas_limit_options.percent_increase is None
            else gas_limit_options.percent_increase
        )
        gas_limit = max(percent_increase(gas_limit_base, increase), gas_limit_options.min)

        deposit = gas_limit * max_fee_per_gas + max_submission_fee + l2_call_value
        logger.debug(
            f"Retryable estimates: gas_limit={gas_limit} max_fee_per_gas={max_fee_per_gas} "
            f"max_submission_fee={max_submission_fee} deposit={deposit}"
        )

        return GasEstimates(
            gas_limit=gas_limit,
            max_fee_per_gas=max_fee_per_gas,
            max_submission_fee=max_submission_fee,
            deposit=deposit,
        )
