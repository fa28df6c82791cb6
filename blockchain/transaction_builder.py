"""
Transaction Builder
Constructs contract deployment transactions
"""

from typing import Dict
from web3 import Web3
from loguru import logger

from utils.gas_calculator import GasCalculator


class TransactionBuilder:
    """
    Builds unsigned deployment transactions
    """

    def __init__(self, w3: Web3, gas_calculator: GasCalculator = None):
        """
        Initialize Transaction Builder

        Args:
            w3: Web3 instance
            gas_calculator: Gas settings source
        """
        self.w3 = w3
        self.gas_calculator = gas_calculator or GasCalculator(w3)

    def build_deployment_tx(self, contract, sender: str, chain_id: int) -> Dict:
        """
        Build transaction deploying `contract` with no constructor arguments

        Args:
            contract: Contract class from w3.eth.contract(abi=..., bytecode=...)
            sender: Deploying address
            chain_id: Target chain id

        Returns:
            Transaction dict
        """
        constructor = contract.constructor()

        nonce = self.w3.eth.get_transaction_count(sender)
        gas_limit = self.gas_calculator.estimate_deployment_gas(constructor, sender)
        gas_price = self.gas_calculator.get_gas_price()

        transaction = constructor.build_transaction({
            'from': sender,
            'nonce': nonce,
            'gas': gas_limit,
            'gasPrice': gas_price,
            'chainId': chain_id
        })

        deployment_cost = self.w3.from_wei(gas_limit * gas_price, 'ether')
        logger.debug(f"Deployment tx: nonce={nonce} gas={gas_limit} max cost={deployment_cost} ETH")

        return transaction
