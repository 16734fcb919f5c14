"""
Utility modules for the payment relay
"""
from .config_loader import load_relay_config, RelayConfig
from .signature import compute_signature, verify_signature

__all__ = [
    'load_relay_config',
    'RelayConfig',
    'compute_signature',
    'verify_signature',
]
