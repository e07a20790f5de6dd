import os
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

from .networks import NETWORKS, get_network_config

GRAPH_GATEWAY_URL = "https://gateway.thegraph.com/api/{api_key}/subgraphs/id/{subgraph_id}"


class Settings(BaseSettings):
    # API Configuration
    log_level: str = "INFO"
    server_host: str = "0.0.0.0"
    default_port: int = 3001
    allowed_origins: str = "http://localhost:3000"

    # Subgraph Configuration
    graph_api_key: Optional[str] = None
    uniswap_subgraph_url: Optional[str] = None
    default_network: str = "ethereum"

    # Leaderboard Configuration
    default_limit: int = 20
    batch_size: int = 1000
    max_swaps: int = 10000
    request_timeout: int = 30  # seconds per subgraph request
    fetch_timeout: int = 60  # seconds per full leaderboard run

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        env_prefix="",  # No prefix for env vars
    )

    @property
    def allowed_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    @property
    def supported_networks(self) -> List[str]:
        return list(NETWORKS.keys())

    def get_subgraph_url(self, network: str) -> str:
        """
        Resolve the subgraph URL for a network.
        Order: <NETWORK>_SUBGRAPH_URL, UNISWAP_SUBGRAPH_URL, The Graph gateway with GRAPH_API_KEY.
        """
        env_var_name = f"{network.upper()}_SUBGRAPH_URL"
        override = os.getenv(env_var_name)
        if override:
            return override

        if self.uniswap_subgraph_url:
            return self.uniswap_subgraph_url

        network_config = get_network_config(network)
        if network_config is None or not self.graph_api_key:
            return ""

        return GRAPH_GATEWAY_URL.format(
            api_key=self.graph_api_key,
            subgraph_id=network_config.subgraph_id
        )


settings = Settings()
