"""
Utilities Package
RPC connection and gas settings
"""

from .gas_calculator import GasCalculator
from .rpc_manager import RPCManager

__all__ = [
    'GasCalculator',
    'RPCManager'
]
