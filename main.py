"""
Contract Deployer - Main Entry Point
Deploys a compiled contract to a configured network

    python main.py --network ganache
"""

import sys
from typing import Optional
import click
from loguru import logger

from blockchain.web3_provider import Web3DeployProvider
from deployer.config import DEFAULT_CONFIG_PATH, DeployerConfig, load_config
from deployer.deployer import Deployer
from deployer.exceptions import ConfigurationError
from deployer.types import DeploymentFailure

DEFAULT_CONTRACT = "DescentralizedBet"

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}"


def configure_logging(verbose: bool = False, log_file: Optional[str] = None):
    """Send regular output to stdout and errors to stderr"""
    error_no = logger.level("ERROR").no

    logger.remove()
    logger.add(
        sys.stdout,
        format=CONSOLE_FORMAT,
        level="DEBUG" if verbose else "INFO",
        filter=lambda record: record["level"].no < error_no
    )
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level="ERROR")

    if log_file:
        logger.add(
            log_file,
            rotation="1 day",
            retention="7 days",
            format=FILE_FORMAT,
            level="DEBUG"
        )


def run_deployment(config: DeployerConfig, network: str, contract_name: str, provider_factory=None) -> int:
    """
    Deploy `contract_name` on `network`

    Returns:
        Process exit code: 0 on success, 1 on failure
    """
    if provider_factory is None:
        def provider_factory(network_config):
            return Web3DeployProvider(network_config, artifacts_dir=config.artifacts_dir)

    try:
        network_config = config.get_network(network)
    except ConfigurationError as e:
        outcome = DeploymentFailure(contract_name=contract_name, cause=e)
    else:
        if config.solidity:
            logger.debug(f"Contracts compiled with solc {config.solidity}")
        outcome = Deployer(provider_factory).run(network_config, contract_name)

    if not outcome.ok:
        cause = outcome.cause
        logger.opt(exception=cause).error(
            f"{contract_name} deployment failed: {type(cause).__name__}: {cause}"
        )
        return 1

    return 0


@click.command()
@click.option("--network", "-n", help="Network name from the configuration file")
@click.option(
    "--contract",
    "-c",
    default=DEFAULT_CONTRACT,
    show_default=True,
    help="Name of the compiled contract to deploy"
)
@click.option(
    "--config",
    "config_path",
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    type=click.Path(dir_okay=False),
    help="Network configuration file"
)
@click.option("--list-networks", is_flag=True, help="Print configured networks and exit")
@click.option("--verbose", "-v", is_flag=True, help="Debug output")
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, help="Also log to this file")
def cli(network, contract, config_path, list_networks, verbose, log_file):
    """Deploy a compiled contract and print its address."""
    configure_logging(verbose=verbose, log_file=log_file)

    try:
        config = load_config(config_path)
    except ConfigurationError as e:
        logger.opt(exception=e).error(f"Invalid configuration: {e}")
        sys.exit(1)

    if list_networks:
        for name, network_config in sorted(config.networks.items()):
            click.echo(f"{name}\t{network_config.rpc_url}")
        sys.exit(0)

    if not network:
        logger.error("No network selected; pass --network <name>")
        sys.exit(1)

    sys.exit(run_deployment(config, network, contract))


if __name__ == "__main__":
    cli()
