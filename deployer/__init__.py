"""
Contract Deployer Core Package
Network configuration, deploy provider interface and the deployment run
"""

from .config import DeployerConfig, NetworkConfig, load_config
from .deployer import Deployer
from .exceptions import (
    ConfigurationError,
    ConfirmationError,
    DeployerError,
    FactoryResolutionError,
    SubmissionError,
)
from .types import DeploymentFailure, DeploymentResult
from .wallet_manager import WalletManager

__all__ = [
    'Deployer',
    'DeployerConfig',
    'NetworkConfig',
    'load_config',
    'WalletManager',
    'DeploymentResult',
    'DeploymentFailure',
    'DeployerError',
    'ConfigurationError',
    'FactoryResolutionError',
    'SubmissionError',
    'ConfirmationError'
]
