"""
Deployer Configuration
Loads the network -> {RPC URL, accounts} record from config/networks.json
"""

import os
import json
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple
from eth_account import Account
from loguru import logger
from dotenv import load_dotenv

from .exceptions import ConfigurationError

load_dotenv()

DEFAULT_CONFIG_PATH = "config/networks.json"
DEFAULT_ARTIFACTS_DIR = "artifacts"


@dataclass(frozen=True)
class NetworkConfig:
    """
    Connection settings for one network

    `accounts` holds private keys; the first one signs deployments.
    """

    name: str
    rpc_url: str
    accounts: Tuple[str, ...] = ()
    chain_id: Optional[int] = None
    confirmation_timeout: Optional[float] = None  # None = provider default

    def validate(self):
        """
        Check the account invariants

        Raises:
            ConfigurationError: no accounts, or a malformed private key
        """
        if not self.accounts:
            raise ConfigurationError(f"Network '{self.name}' has no accounts configured")

        for index, key in enumerate(self.accounts):
            try:
                Account.from_key(key)
            except (ValueError, TypeError) as e:
                # Never echo the key itself
                raise ConfigurationError(
                    f"Network '{self.name}': account #{index} is not a valid private key"
                ) from e


@dataclass(frozen=True)
class DeployerConfig:
    """Static configuration record: compiler setting plus known networks"""

    solidity: Optional[str] = None
    artifacts_dir: str = DEFAULT_ARTIFACTS_DIR
    networks: Dict[str, NetworkConfig] = field(default_factory=dict)

    def get_network(self, name: str) -> NetworkConfig:
        """
        Get configuration for a network selected by name

        Raises:
            ConfigurationError: network is not configured
        """
        if name not in self.networks:
            available = ", ".join(sorted(self.networks)) or "none"
            raise ConfigurationError(f"Unknown network '{name}' (available: {available})")

        return self.networks[name]


def _resolve(entry: Dict, key: str, network: str) -> Optional[str]:
    """Read `key` directly or through the environment variable named by `<key>_env`"""
    env_name = entry.get(f"{key}_env")

    if env_name:
        value = os.getenv(env_name)
        if value:
            return value
        logger.debug(f"{network}: {env_name} not set, falling back to '{key}'")

    return entry.get(key)


def _parse_network(name: str, entry: Dict) -> NetworkConfig:
    if not isinstance(entry, dict):
        raise ConfigurationError(f"Network '{name}' must be an object")

    rpc_url = _resolve(entry, "url", name)
    if not rpc_url:
        raise ConfigurationError(f"Network '{name}' has no RPC url")

    accounts = entry.get("accounts") or []
    accounts_env = entry.get("accounts_env")
    if accounts_env and os.getenv(accounts_env):
        accounts = [a.strip() for a in os.getenv(accounts_env).split(",") if a.strip()]

    if not isinstance(accounts, list):
        raise ConfigurationError(f"Network '{name}': accounts must be a list")

    try:
        chain_id = int(entry["chain_id"]) if entry.get("chain_id") is not None else None
        timeout = entry.get("confirmation_timeout")
        timeout = float(timeout) if timeout is not None else None
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Network '{name}': {e}") from e

    return NetworkConfig(
        name=name,
        rpc_url=rpc_url,
        accounts=tuple(accounts),
        chain_id=chain_id,
        confirmation_timeout=timeout
    )


def parse_config(data: Dict) -> DeployerConfig:
    """
    Build a DeployerConfig from the decoded JSON record

    Args:
        data: {"solidity": ..., "artifacts_dir": ..., "networks": {...}}

    Returns:
        DeployerConfig
    """
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration root must be an object")

    networks = data.get("networks", {})
    if not isinstance(networks, dict):
        raise ConfigurationError("'networks' must map names to network entries")

    return DeployerConfig(
        solidity=data.get("solidity"),
        artifacts_dir=data.get("artifacts_dir", DEFAULT_ARTIFACTS_DIR),
        networks={name: _parse_network(name, entry) for name, entry in networks.items()}
    )


def load_config(path: str = DEFAULT_CONFIG_PATH) -> DeployerConfig:
    """
    Load deployer configuration from a JSON file

    Args:
        path: Path to networks.json

    Returns:
        DeployerConfig
    """
    if not os.path.exists(path):
        raise ConfigurationError(f"Configuration file not found: {path}")

    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e

    config = parse_config(data)
    logger.debug(f"Loaded {len(config.networks)} network(s) from {path}")
    return config
