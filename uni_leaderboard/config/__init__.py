from .settings import settings, Settings
from .networks import NETWORKS, NetworkConfig, get_network_config

__all__ = ["settings", "Settings", "NETWORKS", "NetworkConfig", "get_network_config"]
