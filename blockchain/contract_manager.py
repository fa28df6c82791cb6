"""
Contract Manager
Resolves compiled contracts from Hardhat build artifacts
"""

import os
import json
import glob
from typing import Dict, List, Optional
from loguru import logger

from deployer.exceptions import FactoryResolutionError


class ContractManager:
    """
    Looks up compiled contract artifacts by contract name

    Artifacts follow the Hardhat layout:
    artifacts/contracts/<Source>.sol/<Name>.json
    """

    def __init__(self, artifacts_dir: str = "artifacts"):
        """
        Initialize Contract Manager

        Args:
            artifacts_dir: Hardhat artifacts directory
        """
        self.artifacts_dir = artifacts_dir

        logger.debug(f"Contract Manager initialized ({artifacts_dir})")

    def find_artifact(self, contract_name: str) -> Optional[str]:
        """
        Find the artifact file for a contract

        Args:
            contract_name: Contract name, e.g. "DescentralizedBet"

        Returns:
            Path to the artifact JSON or None
        """
        # Conventional location first
        conventional = os.path.join(
            self.artifacts_dir, "contracts",
            f"{contract_name}.sol", f"{contract_name}.json"
        )
        if os.path.isfile(conventional):
            return conventional

        # Contract declared in a differently named source file
        pattern = os.path.join(self.artifacts_dir, "contracts", "**", f"{contract_name}.json")
        matches = sorted(
            path for path in glob.glob(pattern, recursive=True)
            if not path.endswith(".dbg.json")
        )

        if len(matches) > 1:
            logger.warning(f"Multiple artifacts for {contract_name}, using {matches[0]}")

        return matches[0] if matches else None

    def load_artifact(self, contract_name: str) -> Dict:
        """
        Load ABI and bytecode for a contract

        Args:
            contract_name: Contract name

        Returns:
            {'abi': [...], 'bytecode': '0x...'}

        Raises:
            FactoryResolutionError: contract is not compiled or not deployable
        """
        artifact_path = self.find_artifact(contract_name)

        if not artifact_path:
            raise FactoryResolutionError(
                f"Contract artifact not found for {contract_name} under {self.artifacts_dir} "
                f"(run 'npx hardhat compile' first)"
            )

        try:
            with open(artifact_path, 'r') as f:
                contract_json = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise FactoryResolutionError(f"Unreadable artifact {artifact_path}: {e}") from e

        abi: List[Dict] = contract_json.get('abi')
        bytecode: str = contract_json.get('bytecode') or ''

        if abi is None:
            raise FactoryResolutionError(f"Artifact {artifact_path} has no ABI")

        # Interfaces and abstract contracts compile to empty bytecode
        if bytecode in ('', '0x'):
            raise FactoryResolutionError(f"{contract_name} has no deployable bytecode")

        logger.debug(f"Loaded artifact for {contract_name}: {artifact_path}")
        return {'abi': abi, 'bytecode': bytecode}
