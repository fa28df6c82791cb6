"""
Deployer
Runs one contract deployment against a configured network
"""

from typing import Callable
from loguru import logger

from .config import NetworkConfig
from .exceptions import ConfigurationError
from .provider import DeployProvider
from .types import DeploymentFailure, DeploymentOutcome, DeploymentResult


ProviderFactory = Callable[[NetworkConfig], DeployProvider]


class Deployer:
    """
    One-shot deployment procedure:
    signer -> contract factory -> submit -> confirm -> result

    Failures are never retried; any error ends the run as a DeploymentFailure.
    """

    def __init__(self, provider_factory: ProviderFactory):
        """
        Initialize Deployer

        Args:
            provider_factory: Builds a DeployProvider for a NetworkConfig
        """
        self.provider_factory = provider_factory

    def run(self, config: NetworkConfig, contract_name: str) -> DeploymentOutcome:
        """
        Deploy `contract_name` on the network described by `config`

        Args:
            config: Network configuration
            contract_name: Compiled contract to deploy

        Returns:
            DeploymentResult on confirmation, DeploymentFailure otherwise
        """
        try:
            return self._deploy(config, contract_name)
        except Exception as e:
            logger.debug(f"{contract_name} deployment failed: {type(e).__name__}")
            return DeploymentFailure(contract_name=contract_name, cause=e)

    def _deploy(self, config: NetworkConfig, contract_name: str) -> DeploymentResult:
        config.validate()

        provider = self.provider_factory(config)

        signers = provider.get_signers()
        if not signers:
            raise ConfigurationError(f"No signers available on network '{config.name}'")
        deployer = signers[0]

        logger.info(f"Deploying Contracts with account: {deployer.address}")

        factory = provider.get_contract_factory(contract_name)
        pending = factory.deploy(deployer)

        logger.debug(f"Waiting for confirmation of {pending.transaction_hash}")
        receipt = pending.wait_for_confirmation()
        address = receipt['address']

        logger.info(f"{contract_name} deployed to: {address}")

        return DeploymentResult(
            contract_name=contract_name,
            address=address,
            deployer_account=deployer.address,
            transaction_hash=pending.transaction_hash
        )
