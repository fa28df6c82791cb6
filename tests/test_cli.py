"""
Tests for the command line entry point, output streams and process exit codes
"""

import json

import pytest
from click.testing import CliRunner
from web3 import Web3

import main
from blockchain.web3_provider import Web3DeployProvider
from deployer.config import parse_config
from deployer.exceptions import ConfirmationError, SubmissionError
from tests.conftest import DEPLOYED_ADDRESS, GANACHE_KEYS, FakeProvider
from tests.test_contract_manager import write_artifact
from tests.test_web3_provider import CONTRACT_ADDRESS, mock_w3


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "networks.json"
    path.write_text(json.dumps({
        'solidity': "0.8.28",
        'networks': {
            'ganache': {'url': "http://127.0.0.1:7545", 'accounts': list(GANACHE_KEYS)},
            'empty': {'url': "http://127.0.0.1:8545", 'accounts': []}
        }
    }))
    return str(path)


@pytest.fixture
def fake_provider(monkeypatch):
    """Replace the web3 provider; keyword arguments script its behaviour"""
    options = {}

    def build(network, artifacts_dir=None):
        return FakeProvider(network, **options)

    monkeypatch.setattr(main, "Web3DeployProvider", build)
    return options


def invoke(*args):
    return CliRunner().invoke(main.cli, list(args))


def stdout_lines(result):
    return result.stdout.strip().splitlines()


class TestDeployCommand:
    """`main.py --network <name>`"""

    def test_successful_deployment(self, config_file, fake_provider, deployer_address):
        result = invoke("--network", "ganache", "--config", config_file)

        assert result.exit_code == 0
        lines = stdout_lines(result)
        assert len(lines) == 2
        assert f"Deploying Contracts with account: {deployer_address}" in lines[0]
        assert f"DescentralizedBet deployed to: {DEPLOYED_ADDRESS}" in lines[1]
        assert result.stderr == ""

    def test_other_contract(self, config_file, fake_provider):
        fake_provider['contracts'] = ("Token",)

        result = invoke("--network", "ganache", "--config", config_file, "--contract", "Token")

        assert result.exit_code == 0
        assert f"Token deployed to: {DEPLOYED_ADDRESS}" in result.stdout

    def test_no_accounts(self, config_file, fake_provider):
        result = invoke("--network", "empty", "--config", config_file)

        assert result.exit_code == 1
        assert "ConfigurationError" in result.stderr
        assert "ConfigurationError" not in result.stdout

    def test_unknown_contract(self, config_file, fake_provider):
        result = invoke("--network", "ganache", "--config", config_file, "--contract", "Missing")

        assert result.exit_code == 1
        assert "FactoryResolutionError" in result.stderr
        assert "FactoryResolutionError" not in result.stdout
        assert "deployed to" not in result.stdout

    def test_submission_failure(self, config_file, fake_provider):
        fake_provider['submit_error'] = SubmissionError("connection refused")

        result = invoke("--network", "ganache", "--config", config_file)

        assert result.exit_code == 1
        assert "SubmissionError: connection refused" in result.stderr
        assert "connection refused" not in result.stdout
        assert "deployed to" not in result.stdout

    def test_confirmation_timeout(self, config_file, fake_provider):
        fake_provider['confirm_error'] = ConfirmationError("not confirmed in time")

        result = invoke("--network", "ganache", "--config", config_file)

        assert result.exit_code == 1
        assert "ConfirmationError: not confirmed in time" in result.stderr
        assert "not confirmed in time" not in result.stdout

    def test_unknown_network(self, config_file, fake_provider):
        result = invoke("--network", "mainnet", "--config", config_file)

        assert result.exit_code == 1
        assert "Unknown network 'mainnet'" in result.stderr
        assert result.stdout == ""

    def test_network_required(self, config_file, fake_provider):
        result = invoke("--config", config_file)

        assert result.exit_code == 1
        assert "--network" in result.stderr

    def test_missing_config_file(self, tmp_path, fake_provider):
        result = invoke("--network", "ganache", "--config", str(tmp_path / "nope.json"))

        assert result.exit_code == 1
        assert "Configuration file not found" in result.stderr

    def test_list_networks(self, config_file):
        result = invoke("--list-networks", "--config", config_file)

        assert result.exit_code == 0
        assert stdout_lines(result) == [
            "empty\thttp://127.0.0.1:8545",
            "ganache\thttp://127.0.0.1:7545"
        ]


class TestWeb3Deployment:
    """Full run through the web3 provider against a mocked node"""

    @pytest.fixture
    def web3_config(self, tmp_path, monkeypatch):
        monkeypatch.delenv("TEST_GANACHE_RPC_URL", raising=False)
        artifacts = tmp_path / "artifacts"
        write_artifact(artifacts, "DescentralizedBet.sol", "DescentralizedBet")

        path = tmp_path / "networks.json"
        path.write_text(json.dumps({
            'solidity': "0.8.28",
            'artifacts_dir': str(artifacts),
            'networks': {
                'ganache': {
                    'url': "http://127.0.0.1:7545",
                    'url_env': "TEST_GANACHE_RPC_URL",
                    'accounts': list(GANACHE_KEYS)
                }
            }
        }))
        return str(path)

    @pytest.fixture
    def w3(self, monkeypatch):
        w3 = mock_w3()

        def build(network, artifacts_dir="artifacts"):
            return Web3DeployProvider(network, artifacts_dir=artifacts_dir, w3=w3)

        monkeypatch.setattr(main, "Web3DeployProvider", build)
        return w3

    def test_only_two_lines_on_stdout(self, web3_config, w3, deployer_address):
        result = invoke("--network", "ganache", "--config", web3_config)

        assert result.exit_code == 0
        address = Web3.to_checksum_address(CONTRACT_ADDRESS)
        assert len(stdout_lines(result)) == 2
        assert f"Deploying Contracts with account: {deployer_address}" in result.stdout
        assert f"DescentralizedBet deployed to: {address}" in result.stdout
        assert "Transaction sent" not in result.stdout
        assert "Transaction confirmed" not in result.stdout
        assert result.stderr == ""

    def test_verbose_shows_transaction_progress(self, web3_config, w3):
        result = invoke("--network", "ganache", "--config", web3_config, "--verbose")

        assert result.exit_code == 0
        assert "Transaction sent: 0x" + "ab" * 32 in result.stdout
        assert "Transaction confirmed" in result.stdout
        assert "TEST_GANACHE_RPC_URL not set" in result.stdout

    def test_reverted_deployment_goes_to_stderr(self, web3_config, w3):
        w3.eth.wait_for_transaction_receipt.return_value = {
            'status': 0,
            'contractAddress': None,
            'gasUsed': 21000
        }

        result = invoke("--network", "ganache", "--config", web3_config)

        assert result.exit_code == 1
        assert "ConfirmationError" in result.stderr
        assert "reverted" in result.stderr
        assert len(stdout_lines(result)) == 1
        assert "deployed to" not in result.stdout


class TestRunDeployment:
    """Exit code mapping without the click layer"""

    def test_exit_codes(self):
        config = parse_config({'networks': {'ganache': {'url': "http://127.0.0.1:7545", 'accounts': list(GANACHE_KEYS)}}})

        assert main.run_deployment(config, "ganache", "DescentralizedBet", provider_factory=FakeProvider) == 0
        assert main.run_deployment(config, "ganache", "Unknown", provider_factory=FakeProvider) == 1
        assert main.run_deployment(config, "sepolia", "DescentralizedBet", provider_factory=FakeProvider) == 1
