"""
Gas Calculator
Gas limit and price selection for deployment transactions
"""

from web3 import Web3
from web3.exceptions import Web3Exception
from loguru import logger


DEFAULT_GAS_LIMIT = 3_000_000
GAS_BUFFER = 1.2  # 20% over the node's estimate


class GasCalculator:
    """
    Picks gas settings for a deployment transaction
    """

    def __init__(self, w3: Web3, default_gas_limit: int = DEFAULT_GAS_LIMIT):
        """
        Initialize Gas Calculator

        Args:
            w3: Web3 instance
            default_gas_limit: Gas limit used when estimation fails
        """
        self.w3 = w3
        self.default_gas_limit = default_gas_limit

    def estimate_deployment_gas(self, constructor, sender: str) -> int:
        """
        Estimate gas for a constructor call, with buffer

        Args:
            constructor: Contract constructor (ContractConstructor)
            sender: Deploying address

        Returns:
            Gas limit
        """
        try:
            gas_estimate = constructor.estimate_gas({'from': sender})
            gas_limit = int(gas_estimate * GAS_BUFFER)
        except (Web3Exception, ValueError) as e:
            logger.warning(f"Gas estimation failed: {e}, using default")
            gas_limit = self.default_gas_limit

        logger.debug(f"Gas limit: {gas_limit}")
        return gas_limit

    def get_gas_price(self) -> int:
        """
        Current network gas price

        Returns:
            Gas price in wei
        """
        gas_price = self.w3.eth.gas_price
        logger.debug(f"Gas price: {self.w3.from_wei(gas_price, 'gwei')} gwei")
        return gas_price
