"""Result types produced by a deployment run."""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class DeploymentResult:
    """Successful deployment of a contract."""

    contract_name: str
    address: str  # Checksummed contract address
    deployer_account: str  # Address of the signing account
    transaction_hash: Optional[str] = None

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class DeploymentFailure:
    """Failed deployment; `cause` is the original exception, unmodified."""

    contract_name: str
    cause: BaseException

    @property
    def ok(self) -> bool:
        return False


DeploymentOutcome = Union[DeploymentResult, DeploymentFailure]
