"""
Deploy Provider Interface
Collaborator that talks to the chain on behalf of the Deployer
"""

from abc import ABC, abstractmethod
from typing import Dict, List


class PendingDeployment(ABC):
    """A submitted, not yet confirmed deployment transaction"""

    transaction_hash: str = None

    @abstractmethod
    def wait_for_confirmation(self) -> Dict:
        """
        Block until the deployment is mined

        Returns:
            {'address': <contract address>}

        Raises:
            ConfirmationError: reverted or timed out
        """


class ContractFactory(ABC):
    """Handle able to submit a deployment for one compiled contract"""

    contract_name: str = None

    @abstractmethod
    def deploy(self, signer) -> PendingDeployment:
        """
        Submit the deployment transaction signed by `signer`

        Raises:
            SubmissionError: network/RPC failure
        """


class DeployProvider(ABC):
    """Source of signers and contract factories for one network"""

    @abstractmethod
    def get_signers(self) -> List:
        """Signing identities, in configured account order"""

    @abstractmethod
    def get_contract_factory(self, name: str) -> ContractFactory:
        """
        Raises:
            FactoryResolutionError: `name` is not a known compiled contract
        """
