"""
Wallet Manager
Turns configured private keys into signing accounts
"""

from typing import Dict, List, Sequence
from eth_account import Account
from eth_account.signers.local import LocalAccount
from loguru import logger

from .exceptions import ConfigurationError


class WalletManager:
    """
    Holds the signing accounts of a network, in configured order.
    """

    def __init__(self, private_keys: Sequence[str]):
        """
        Initialize wallet manager

        Args:
            private_keys: Private keys from the network configuration
        """
        if not private_keys:
            raise ConfigurationError("At least one account must be configured")

        self.accounts: List[LocalAccount] = []
        for index, key in enumerate(private_keys):
            try:
                self.accounts.append(Account.from_key(key))
            except (ValueError, TypeError) as e:
                raise ConfigurationError(f"Account #{index} is not a valid private key") from e

        logger.debug(f"Wallet manager loaded {len(self.accounts)} account(s)")

    def sign_transaction(self, transaction: Dict, account: LocalAccount):
        """
        Sign a transaction

        Args:
            transaction: Transaction dict
            account: Signing account, one of `accounts`

        Returns:
            Signed transaction
        """
        try:
            return account.sign_transaction(transaction)
        except Exception as e:
            logger.error(f"Error signing transaction: {e}")
            raise
