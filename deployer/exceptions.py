"""
Deployer Exceptions
Error taxonomy for a deployment run
"""


class DeployerError(Exception):
    """Base exception for deployment errors"""

    pass


class ConfigurationError(DeployerError, ValueError):
    """Raised for a missing network entry or bad/missing accounts"""

    pass


class FactoryResolutionError(DeployerError, LookupError):
    """Raised when the named contract has no compiled artifact"""

    pass


class SubmissionError(DeployerError):
    """Raised when the deployment transaction could not be sent"""

    pass


class ConfirmationError(DeployerError):
    """Raised when the deployment reverted or confirmation timed out"""

    pass
