"""
Key Derivation Function and Key Management Package

This package keeps graph keys in a sealed keyring whose root key can be
derived from a passphrase with Argon2id.
"""

from .key_management import (
    GraphKeyring,
    KDF_DEFAULT_PARAMS,
    StoredGraph,
    derive_root_key,
    generate_salt,
)

__all__ = ['GraphKeyring', 'StoredGraph', 'derive_root_key', 'generate_salt', 'KDF_DEFAULT_PARAMS']
