"""Registry of the L1 / L2 network pairs the bridge helpers can talk to.

Networks are described by the static JSON blobs the Nitro test node writes
out (camelCase keys). Arbitrum One is known out of the box; anything else has
to be registered with `add_custom_network` or `load_custom_network` before a
script looks it up.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Optional, Union

from web3 import Web3

from arb_bridge.exceptions import NetworkConfigurationError

logger = logging.getLogger("arb_bridge.networks")


def _checksum(address: Optional[str]) -> Optional[str]:
    return Web3.to_checksum_address(address) if address else None


@dataclass
class EthBridge:
    """Core rollup contracts deployed on L1."""

    bridge: str
    inbox: str
    outbox: str
    rollup: str
    sequencer_inbox: str

    @classmethod
    def from_dict(cls, data: dict) -> "EthBridge":
        try:
            return cls(
                bridge=Web3.to_checksum_address(data["bridge"]),
                inbox=Web3.to_checksum_address(data["inbox"]),
                outbox=Web3.to_checksum_address(data["outbox"]),
                rollup=Web3.to_checksum_address(data["rollup"]),
                sequencer_inbox=Web3.to_checksum_address(data["sequencerInbox"]),
            )
        except KeyError as e:
            raise NetworkConfigurationError(f"Incomplete ethBridge configuration: missing {e}") from e
        except ValueError as e:
            raise NetworkConfigurationError(f"Invalid ethBridge configuration: {e}") from e


# JSON key -> dataclass field; the node output is not consistent about "MultiCall"
_TOKEN_BRIDGE_KEYS = {
    "l1CustomGateway": "l1_custom_gateway",
    "l1ERC20Gateway": "l1_erc20_gateway",
    "l1GatewayRouter": "l1_gateway_router",
    "l1MultiCall": "l1_multicall",
    "l1ProxyAdmin": "l1_proxy_admin",
    "l1Weth": "l1_weth",
    "l1WethGateway": "l1_weth_gateway",
    "l2CustomGateway": "l2_custom_gateway",
    "l2ERC20Gateway": "l2_erc20_gateway",
    "l2GatewayRouter": "l2_gateway_router",
    "l2Multicall": "l2_multicall",
    "l2ProxyAdmin": "l2_proxy_admin",
    "l2Weth": "l2_weth",
    "l2WethGateway": "l2_weth_gateway",
}


@dataclass
class TokenBridge:
    """Token gateway contracts on both chains."""

    l1_gateway_router: str
    l2_gateway_router: str
    l1_erc20_gateway: str
    l2_erc20_gateway: str
    l1_custom_gateway: Optional[str] = None
    l2_custom_gateway: Optional[str] = None
    l1_weth_gateway: Optional[str] = None
    l2_weth_gateway: Optional[str] = None
    l1_weth: Optional[str] = None
    l2_weth: Optional[str] = None
    l1_multicall: Optional[str] = None
    l2_multicall: Optional[str] = None
    l1_proxy_admin: Optional[str] = None
    l2_proxy_admin: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "TokenBridge":
        kwargs = {}
        for key, attr in _TOKEN_BRIDGE_KEYS.items():
            if key in data:
                kwargs[attr] = _checksum(data[key])
        try:
            return cls(**kwargs)
        except TypeError as e:
            raise NetworkConfigurationError(f"Incomplete tokenBridge configuration: {e}") from e


@dataclass
class L1Network:
    chain_id: int
    name: str
    block_time: int
    partner_chain_ids: list[int] = field(default_factory=list)
    rpc_url: str = ""
    explorer_url: str = ""
    is_custom: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "L1Network":
        try:
            return cls(
                chain_id=int(data["chainID"]),
                name=data["name"],
                block_time=int(data["blockTime"]),
                partner_chain_ids=[int(c) for c in data.get("partnerChainIDs", [])],
                rpc_url=data.get("rpcURL", ""),
                explorer_url=data.get("explorerUrl", ""),
                is_custom=bool(data.get("isCustom", False)),
            )
        except KeyError as e:
            raise NetworkConfigurationError(f"Incomplete L1 network configuration: missing {e}") from e
        except ValueError as e:
            raise NetworkConfigurationError(f"Invalid L1 network configuration: {e}") from e


@dataclass
class L2Network:
    chain_id: int
    name: str
    partner_chain_id: int
    confirm_period_blocks: int
    eth_bridge: EthBridge
    token_bridge: TokenBridge
    retryable_lifetime_seconds: int = 7 * 24 * 60 * 60
    rpc_url: str = ""
    explorer_url: str = ""
    is_arbitrum: bool = True
    is_custom: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "L2Network":
        try:
            return cls(
                chain_id=int(data["chainID"]),
                name=data["name"],
                partner_chain_id=int(data["partnerChainID"]),
                confirm_period_blocks=int(data["confirmPeriodBlocks"]),
                eth_bridge=EthBridge.from_dict(data["ethBridge"]),
                token_bridge=TokenBridge.from_dict(data["tokenBridge"]),
                retryable_lifetime_seconds=int(data.get("retryableLifetimeSeconds", 7 * 24 * 60 * 60)),
                rpc_url=data.get("rpcURL", ""),
                explorer_url=data.get("explorerUrl", ""),
                is_arbitrum=bool(data.get("isArbitrum", True)),
                is_custom=bool(data.get("isCustom", False)),
            )
        except KeyError as e:
            raise NetworkConfigurationError(f"Incomplete L2 network configuration: missing {e}") from e
        except ValueError as e:
            raise NetworkConfigurationError(f"Invalid L2 network configuration: {e}") from e


l1_networks: dict[int, L1Network] = {
    1: L1Network(
        chain_id=1,
        name="Mainnet",
        block_time=14,
        partner_chain_ids=[42161],
        rpc_url="https://mainnet.infura.io",
        explorer_url="https://etherscan.io",
    ),
}

l2_networks: dict[int, L2Network] = {
    42161: L2Network(
        chain_id=42161,
        name="Arbitrum One",
        partner_chain_id=1,
        confirm_period_blocks=45818,
        eth_bridge=EthBridge(
            bridge="0x8315177aB297bA92A06054cE80a67Ed4DBd7ed3a",
            inbox="0x4Dbd4fc535Ac27206064B68FfCf827b0A60BAB3f",
            outbox="0x0B9857ae2D4A3DBe74ffE1d7DF045bb7F96E4840",
            rollup="0x5eF0D09d1E6204141B4d37530808eD19f60FBa35",
            sequencer_inbox="0x1c479675ad559DC151F6Ec7ed3FbF8ceE79582B6",
        ),
        token_bridge=TokenBridge(
            l1_gateway_router="0x72Ce9c846789fdB6fC1f34aC4AD25Dd9ef7031ef",
            l2_gateway_router="0x5288c571Fd7aD117beA99bF60FE0846C4E84F933",
            l1_erc20_gateway="0xa3A7B6F88361F48403514059F1F16C8E78d60EeC",
            l2_erc20_gateway="0x09e9222E96E7B4AE2a407B98d48e330053351EEe",
            l1_custom_gateway="0xcEe284F754E854890e311e3280b767F80797180d",
            l2_custom_gateway="0x096760F208390250649E3e8763348E783AEF5562",
            l1_weth_gateway="0xd92023E9d9911199a6711321D1277285e6d4e2db",
            l2_weth_gateway="0x6c411aD3E74De3E7Bd422b94A27770f5B86C623B",
            l1_weth="0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",
            l2_weth="0x82aF49447D8a07e3bd95BD0d56f35241523fBab1",
        ),
        rpc_url="https://arb1.arbitrum.io/rpc",
        explorer_url="https://arbiscan.io",
    ),
}


def _resolve_chain_id(w3_or_chain_id: Union[Web3, int]) -> int:
    if isinstance(w3_or_chain_id, int):
        return w3_or_chain_id
    return int(w3_or_chain_id.eth.chain_id)


def get_l1_network(w3_or_chain_id: Union[Web3, int]) -> L1Network:
    """Look up a registered L1 network by chain id (or by querying a provider)."""
    chain_id = _resolve_chain_id(w3_or_chain_id)
    if chain_id not in l1_networks:
        raise NetworkConfigurationError(f"Unrecognized network {chain_id}.")
    return l1_networks[chain_id]


def get_l2_network(w3_or_chain_id: Union[Web3, int]) -> L2Network:
    """Look up a registered L2 network by chain id (or by querying a provider)."""
    chain_id = _resolve_chain_id(w3_or_chain_id)
    if chain_id not in l2_networks:
        raise NetworkConfigurationError(f"Unrecognized network {chain_id}.")
    return l2_networks[chain_id]


def _as_l1_network(network: Union[L1Network, dict]) -> L1Network:
    return network if isinstance(network, L1Network) else L1Network.from_dict(network)


def _as_l2_network(network: Union[L2Network, dict]) -> L2Network:
    return network if isinstance(network, L2Network) else L2Network.from_dict(network)


def add_custom_network(
    custom_l1_network: Optional[Union[L1Network, dict]],
    custom_l2_network: Union[L2Network, dict],
) -> L2Network:
    """
    Register a custom L2 network along with its L1 partner.

    Args:
        custom_l1_network: L1 partner description (dataclass or camelCase
            blob); may be None when the partner chain is already registered.
        custom_l2_network: L2 network description (dataclass or camelCase blob).

    Returns:
        L2Network: The registered L2 network.

    Raises:
        NetworkConfigurationError: If a network is already registered, is not
            flagged as custom, or its partner chain is unknown.
    """
    l2_network = _as_l2_network(custom_l2_network)
    l1_network = _as_l1_network(custom_l1_network) if custom_l1_network is not None else None

    if l1_network is not None:
        if l1_network.chain_id in l1_networks:
            raise NetworkConfigurationError(f"Network {l1_network.chain_id} already included")
        if not l1_network.is_custom:
            raise NetworkConfigurationError(f"Custom network {l1_network.chain_id} must have isCustom flag set to true")

    if l2_network.chain_id in l2_networks:
        raise NetworkConfigurationError(f"Network {l2_network.chain_id} already included")
    if not l2_network.is_custom:
        raise NetworkConfigurationError(f"Custom network {l2_network.chain_id} must have isCustom flag set to true")

    partner = l1_network if l1_network is not None else l1_networks.get(l2_network.partner_chain_id)
    if partner is None or partner.chain_id != l2_network.partner_chain_id:
        raise NetworkConfigurationError(
            f"Network {l2_network.chain_id}'s partner network, {l2_network.partner_chain_id}, not recognized"
        )

    if l1_network is not None:
        l1_networks[l1_network.chain_id] = l1_network
    l2_networks[l2_network.chain_id] = l2_network

    if l2_network.chain_id not in partner.partner_chain_ids:
        partner.partner_chain_ids.append(l2_network.chain_id)

    logger.info(f"Registered custom network {l2_network.name} ({l2_network.chain_id})")
    return l2_network


def load_custom_network(path: str) -> L2Network:
    """
    Register the network pair stored in a JSON file.

    The file holds `customL1Network` / `customL2Network` (the keys the Nitro
    test node's `localNetwork.json` calls `l1Network` / `l2Network` are
    accepted too). Loading the same pair twice is a no-op.
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    l1_data = data.get("customL1Network", data.get("l1Network"))
    l2_data = data.get("customL2Network", data.get("l2Network"))
    if l2_data is None:
        raise NetworkConfigurationError(f"No L2 network found in {path}")

    l2_network = L2Network.from_dict(l2_data)
    l1_network = L1Network.from_dict(l1_data) if l1_data is not None else None

    registered = l2_networks.get(l2_network.chain_id)
    if registered is not None and registered == l2_network:
        return registered

    if l1_network is not None and l1_network.chain_id in l1_networks:
        # The partner may already be known from a different L2 blob
        known = l1_networks[l1_network.chain_id]
        if known.is_custom and known.name == l1_network.name:
            l1_network = None

    return add_custom_network(l1_network, l2_network)
