"""
Web3 Deploy Provider
Deploys Hardhat-compiled contracts over JSON-RPC with locally held keys
"""

from typing import Dict, List, Optional
from web3 import Web3
from web3.exceptions import TimeExhausted, Web3Exception
from loguru import logger

from deployer.config import NetworkConfig
from deployer.exceptions import ConfirmationError, SubmissionError
from deployer.provider import ContractFactory, DeployProvider, PendingDeployment
from deployer.wallet_manager import WalletManager
from utils.rpc_manager import RPCManager
from .contract_manager import ContractManager
from .transaction_builder import TransactionBuilder

# Errors web3 raises for RPC failures; requests' connection errors are OSErrors
RPC_ERRORS = (Web3Exception, ValueError, OSError)


class Web3PendingDeployment(PendingDeployment):
    """Deployment transaction that has been broadcast"""

    def __init__(self, w3: Web3, contract_name: str, tx_hash, timeout: Optional[float] = None):
        self.w3 = w3
        self.contract_name = contract_name
        self.tx_hash = tx_hash
        self.transaction_hash = Web3.to_hex(tx_hash)
        self.timeout = timeout

    def wait_for_confirmation(self) -> Dict:
        kwargs = {} if self.timeout is None else {'timeout': self.timeout}

        try:
            receipt = self.w3.eth.wait_for_transaction_receipt(self.tx_hash, **kwargs)
        except TimeExhausted as e:
            raise ConfirmationError(
                f"{self.contract_name} deployment {self.transaction_hash} not confirmed in time"
            ) from e
        except RPC_ERRORS as e:
            raise ConfirmationError(
                f"Error waiting for {self.contract_name} deployment {self.transaction_hash}: {e}"
            ) from e

        if receipt['status'] != 1:
            raise ConfirmationError(
                f"{self.contract_name} deployment reverted (tx {self.transaction_hash})"
            )

        address = Web3.to_checksum_address(receipt['contractAddress'])

        logger.debug(f"Transaction confirmed: {self.transaction_hash}")
        logger.debug(f"Gas used: {receipt['gasUsed']}")

        return {'address': address}


class Web3ContractFactory(ContractFactory):
    """Factory for one compiled contract on one network"""

    def __init__(self, provider: "Web3DeployProvider", contract_name: str, abi: List[Dict], bytecode: str):
        self.provider = provider
        self.contract_name = contract_name
        self.abi = abi
        self.bytecode = bytecode

    def deploy(self, signer) -> Web3PendingDeployment:
        rpc = self.provider.rpc_manager
        w3 = rpc.ensure_connected()

        try:
            contract = w3.eth.contract(abi=self.abi, bytecode=self.bytecode)
            transaction = self.provider.transaction_builder.build_deployment_tx(
                contract, signer.address, rpc.chain_id
            )

            signed_tx = self.provider.wallet_manager.sign_transaction(transaction, signer)
            tx_hash = w3.eth.send_raw_transaction(signed_tx.raw_transaction)
        except RPC_ERRORS as e:
            raise SubmissionError(f"Failed to submit {self.contract_name} deployment: {e}") from e

        pending = Web3PendingDeployment(
            w3, self.contract_name, tx_hash, timeout=rpc.network.confirmation_timeout
        )
        logger.debug(f"Transaction sent: {pending.transaction_hash}")
        return pending


class Web3DeployProvider(DeployProvider):
    """
    DeployProvider backed by web3.py

    Signers come from the network's configured private keys; contract
    factories from Hardhat artifacts.
    """

    def __init__(self, network: NetworkConfig, artifacts_dir: str = "artifacts", w3: Optional[Web3] = None):
        """
        Initialize provider

        Args:
            network: Network configuration
            artifacts_dir: Hardhat artifacts directory
            w3: Pre-built Web3 instance (created from rpc_url if None)
        """
        self.network = network
        self.wallet_manager = WalletManager(network.accounts)
        self.rpc_manager = RPCManager(network, w3=w3)
        self.contract_manager = ContractManager(artifacts_dir)
        self.transaction_builder = TransactionBuilder(self.rpc_manager.w3)

        logger.debug(f"Web3 provider ready for {network.name} ({network.rpc_url})")

    def get_signers(self) -> List:
        return list(self.wallet_manager.accounts)

    def get_contract_factory(self, name: str) -> Web3ContractFactory:
        artifact = self.contract_manager.load_artifact(name)
        return Web3ContractFactory(self, name, artifact['abi'], artifact['bytecode'])
