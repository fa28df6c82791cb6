"""
Blockchain Interaction Package
Handles contract artifacts, deployment transactions and the web3 deploy provider
"""

from .contract_manager import ContractManager
from .transaction_builder import TransactionBuilder
from .web3_provider import Web3DeployProvider

__all__ = ['ContractManager', 'TransactionBuilder', 'Web3DeployProvider']
