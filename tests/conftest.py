"""
Shared fixtures: network configs, a scripted deploy provider and log capture
"""

import sys
import pytest
from eth_account import Account
from loguru import logger

from deployer.config import NetworkConfig
from deployer.exceptions import FactoryResolutionError
from deployer.provider import ContractFactory, DeployProvider, PendingDeployment


GANACHE_KEYS = (
    "0xddf186adadb92ce94f1c1ac5886846c2952a73d55242300ba0da0282988d07e0",
    "0x67de66601ab6dfb95ff796bb3deebaa8f59e1f9967014e9abab7ac7460713206",
    "0x76c92147c2823e91ab73db46eabcdd0266ecef03c1b4a243006d04cc9b4b66f2",
    "0x6ca1f861de1cce48d788da47fc23da2dc301e8e8155013642fcdb6d69f161224",
    "0x122920e6bb42876bd80f6e80a2805750adeee62af00cd20bfe6d3fe6451334ee",
)

DEPLOYED_ADDRESS = "0xABCDEF0000000000000000000000000000000001"


class FakePendingDeployment(PendingDeployment):
    def __init__(self, address, error=None):
        self.address = address
        self.error = error
        self.transaction_hash = "0x" + "12" * 32

    def wait_for_confirmation(self):
        if self.error:
            raise self.error
        return {'address': self.address}


class FakeContractFactory(ContractFactory):
    def __init__(self, provider, contract_name):
        self.provider = provider
        self.contract_name = contract_name

    def deploy(self, signer):
        self.provider.deploy_calls.append((self.contract_name, signer.address))
        if self.provider.submit_error:
            raise self.provider.submit_error
        return FakePendingDeployment(self.provider.address, self.provider.confirm_error)


class FakeProvider(DeployProvider):
    """Provider that signs with the configured keys and never touches a chain"""

    def __init__(self, network, contracts=("DescentralizedBet",), address=DEPLOYED_ADDRESS,
                 submit_error=None, confirm_error=None):
        self.network = network
        self.contracts = contracts
        self.address = address
        self.submit_error = submit_error
        self.confirm_error = confirm_error
        self.deploy_calls = []

    def get_signers(self):
        return [Account.from_key(key) for key in self.network.accounts]

    def get_contract_factory(self, name):
        if name not in self.contracts:
            raise FactoryResolutionError(f"Contract artifact not found for {name}")
        return FakeContractFactory(self, name)


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop sinks bound to streams that only live for one test"""
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def log_messages():
    """Collect plain log messages"""
    messages = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def ganache():
    """Network with the five local ganache accounts"""
    return NetworkConfig(name="ganache", rpc_url="http://127.0.0.1:7545", accounts=GANACHE_KEYS)


@pytest.fixture
def deployer_address():
    return Account.from_key(GANACHE_KEYS[0]).address
