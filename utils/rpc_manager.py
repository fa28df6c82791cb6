"""
RPC Manager
Web3 connection for the selected network
"""

from typing import Optional
from web3 import Web3
from loguru import logger

from deployer.config import NetworkConfig
from deployer.exceptions import SubmissionError


class RPCManager:
    """
    Owns the Web3 instance for one network.
    No connection is attempted until the chain is first needed.
    """

    def __init__(self, network: NetworkConfig, w3: Optional[Web3] = None):
        """
        Initialize RPC Manager

        Args:
            network: Network configuration
            w3: Pre-built Web3 instance (created from rpc_url if None)
        """
        self.network = network
        self.w3 = w3 if w3 is not None else Web3(Web3.HTTPProvider(network.rpc_url))
        self._chain_id = network.chain_id

    def ensure_connected(self) -> Web3:
        """
        Get the Web3 instance, checking the endpoint is reachable

        Raises:
            SubmissionError: endpoint unreachable
        """
        if not self.w3.is_connected():
            raise SubmissionError(
                f"Failed to connect to network '{self.network.name}' at {self.network.rpc_url}"
            )

        return self.w3

    @property
    def chain_id(self) -> int:
        """Configured chain id, else the one reported by the node"""
        if self._chain_id is None:
            self._chain_id = self.w3.eth.chain_id
            logger.debug(f"{self.network.name}: chain id {self._chain_id}")

        return self._chain_id
