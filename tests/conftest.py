import copy
import os
from unittest.mock import MagicMock

import pytest
from web3 import Web3

from arb_bridge import networks
from arb_bridge.config import load_contract_abis
from arb_bridge.networks import load_custom_network

NETWORKS_DIR = os.path.join(os.path.dirname(__file__), "..", "examples", "networks")

ACCOUNT_ADDRESS = Web3.to_checksum_address("0x" + "a1" * 20)


@pytest.fixture(autouse=True)
def isolated_networks(monkeypatch):
    """Each test starts from the built-in network registry."""
    monkeypatch.setattr(networks, "l1_networks", copy.deepcopy(networks.l1_networks))
    monkeypatch.setattr(networks, "l2_networks", copy.deepcopy(networks.l2_networks))


@pytest.fixture
def local_network_path():
    return os.path.join(NETWORKS_DIR, "local_network.json")


@pytest.fixture
def greeter_network_path():
    return os.path.join(NETWORKS_DIR, "greeter_local_network.json")


@pytest.fixture
def local_network(local_network_path):
    return load_custom_network(local_network_path)


@pytest.fixture
def abis():
    return load_contract_abis()


@pytest.fixture
def account():
    w3account = MagicMock()
    w3account.address = ACCOUNT_ADDRESS
    w3account.key = b"\x01" * 32
    return w3account


@pytest.fixture
def mock_config(local_network, abis, account):
    """Config dict shaped like get_config()'s, backed by mocks instead of RPC endpoints."""
    l1_w3 = MagicMock()
    l2_w3 = MagicMock()
    l2_w3.eth.chain_id = local_network.chain_id

    return {
        "private_key": "0x" + "01" * 32,
        "l1_w3": l1_w3,
        "l2_w3": l2_w3,
        "w3account": account,
        "l1_network": networks.get_l1_network(local_network.partner_chain_id),
        "l2_network": local_network,
        "abis": abis,
        "w3contracts": {
            "inbox": MagicMock(),
            "bridge": MagicMock(),
            "l1_gateway_router": MagicMock(),
            "l2_gateway_router": MagicMock(),
            "arb_sys": MagicMock(),
            "arb_retryable_tx": MagicMock(),
            "node_interface": MagicMock(),
        },
    }
