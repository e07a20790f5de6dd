from typing import Dict, NamedTuple, Optional


class NetworkConfig(NamedTuple):
    name: str
    subgraph_id: str


# Uniswap v3 subgraph deployments on The Graph Network
NETWORKS: Dict[str, NetworkConfig] = {
    "ethereum": NetworkConfig("Ethereum", "5zvR82QoaXYFyDEKLZ9t6v9adgnptxYpKpSbxtgVENFV"),
    "arbitrum": NetworkConfig("Arbitrum One", "FbCGRftH4a3yZugY7TnbYgPJVEv2LvMT6oF1fxPe9aJM"),
    "polygon": NetworkConfig("Polygon", "3hCPRGf4z88VC5rsBKU5AA9FBBq5nF3jbKJG7VZCbhjm"),
    "optimism": NetworkConfig("Optimism", "Cghf4LfVqPiFw6fp6Y5X5Ubc8UpmUhSfJL82zwiBFLaj"),
    "base": NetworkConfig("Base", "43Hwfi3dJSoGpyas9VkK2E9DiKpweh7jijkRBhWGwHJK"),
}

NETWORK_ALIASES = {"mainnet": "ethereum"}


def get_network_config(network: str) -> Optional[NetworkConfig]:
    """Look up a network by name or alias (case-insensitive)"""
    key = network.strip().lower()
    return NETWORKS.get(NETWORK_ALIASES.get(key, key))
