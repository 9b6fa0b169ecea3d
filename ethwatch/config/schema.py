"""Configuration schema using Pydantic.

Single data model and defaults, persisted to ~/.ethwatch/config.json.
"""

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings

from ethwatch.chain.parser import ERC20_TRANSFER_TOPIC


class RpcConfig(BaseModel):
    """Upstream node configuration."""
    url: str = "https://ethereum-rpc.publicnode.com/"
    timeout: float = 5.0  # Outbound client timeout in seconds
    # topic0 of the logs filter; override if the node indexes a different signature
    transfer_topic: str = ERC20_TRANSFER_TOPIC


class ServerConfig(BaseModel):
    """HTTP server configuration."""
    host: str = "0.0.0.0"
    port: int = 8080
    keep_alive_seconds: int = 10
    graceful_shutdown_seconds: int = 10


class LoggingConfig(BaseModel):
    """Log sink configuration."""
    level: str = "INFO"
    file_enabled: bool = True


class Config(BaseSettings):
    """Root configuration for ethwatch."""
    rpc: RpcConfig = RpcConfig()
    server: ServerConfig = ServerConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = ConfigDict(
        env_prefix="ETHWATCH_",
        env_nested_delimiter="__"
    )
