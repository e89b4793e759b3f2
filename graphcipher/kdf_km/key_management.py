"""
Graph Key Management

This module keeps graph keys in an in-memory keyring. Each stored graph
is sealed with AES-GCM under a 256-bit root key, which can come from the
environment or be derived from a passphrase with Argon2id.
"""

import base64
import hashlib
import json
import logging
import os
import secrets
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union

import argon2
from argon2.low_level import Type
from Cryptodome.Cipher import AES

from ..key_schedule.graph_key_schedule import Graph

logger = logging.getLogger(__name__)

ROOT_KEY_ENV_VAR = 'GRAPHCIPHER_ROOT_KEY'
ROOT_KEY_SALT = b'GraphCipher_ROOT_KEY_SALT_v1'
SEALED_FORMAT_VERSION = 1

# Default parameters for Argon2id
KDF_DEFAULT_PARAMS = {
    'time_cost': 4,       # Number of iterations
    'memory_cost': 65536, # 64 MB
    'parallelism': 4,     # Number of threads
    'hash_len': 32,       # Output size in bytes
    'salt_len': 16        # Salt size in bytes
}


def generate_salt(length: int = KDF_DEFAULT_PARAMS['salt_len']) -> bytes:
    """
    Generate a cryptographically secure random salt.

    Args:
        length: Length of the salt in bytes

    Returns:
        Random salt as bytes
    """
    return secrets.token_bytes(length)


def derive_root_key(passphrase: Union[str, bytes],
                    salt: bytes,
                    time_cost: int = KDF_DEFAULT_PARAMS['time_cost'],
                    memory_cost: int = KDF_DEFAULT_PARAMS['memory_cost'],
                    parallelism: int = KDF_DEFAULT_PARAMS['parallelism']) -> bytes:
    """
    Derive a 256-bit keyring root key from a passphrase using Argon2id.

    Args:
        passphrase: Passphrase to derive the key from
        salt: Salt value
        time_cost: Number of iterations
        memory_cost: Memory usage in KiB
        parallelism: Degree of parallelism

    Returns:
        Derived key as bytes
    """
    if isinstance(passphrase, str):
        passphrase = passphrase.encode('utf-8')

    return argon2.low_level.hash_secret_raw(
        secret=passphrase,
        salt=salt,
        time_cost=time_cost,
        memory_cost=memory_cost,
        parallelism=parallelism,
        hash_len=KDF_DEFAULT_PARAMS['hash_len'],
        type=Type.ID
    )


def _record_header(key_id: str, version: int, created_at: int,
                   metadata: Dict[str, Any]) -> bytes:
    """Canonical encoding of a sealed record's clear fields, bound as GCM associated data."""
    return json.dumps({
        'id': key_id,
        'version': version,
        'created_at': created_at,
        'metadata': metadata,
    }, sort_keys=True, separators=(',', ':')).encode('utf-8')


@dataclass
class StoredGraph:
    """A graph key held by the keyring."""
    id: str
    version: int
    created_at: int
    graph: Graph
    metadata: Dict[str, Any] = field(default_factory=dict)


class GraphKeyring:
    """
    Stores graph keys, seals them for export and rotates them.
    """

    def __init__(self, root_key_source: str = 'env', root_key: Optional[bytes] = None):
        """
        Initialize the keyring.

        Args:
            root_key_source: Source of the root key ('env' or 'provided')
            root_key: Root key if explicitly provided
        """
        self.keys: Dict[str, StoredGraph] = {}

        if root_key_source == 'env':
            env_key = os.environ.get(ROOT_KEY_ENV_VAR)
            if not env_key:
                raise ValueError(f"Root key not found in environment variable {ROOT_KEY_ENV_VAR}")
            self.root_key = hashlib.sha256(env_key.encode() + ROOT_KEY_SALT).digest()
        elif root_key_source == 'provided' and root_key is not None:
            if len(root_key) != 32:
                raise ValueError("Root key must be 32 bytes (256 bits)")
            self.root_key = root_key
        else:
            raise ValueError("Invalid root key source or missing provided key")

    @classmethod
    def from_passphrase(cls, passphrase: str, salt: bytes,
                        params: Optional[Dict[str, int]] = None) -> 'GraphKeyring':
        """
        Create a keyring whose root key is derived from a passphrase.
        """
        params = params or KDF_DEFAULT_PARAMS
        root_key = derive_root_key(
            passphrase,
            salt,
            time_cost=params.get('time_cost', KDF_DEFAULT_PARAMS['time_cost']),
            memory_cost=params.get('memory_cost', KDF_DEFAULT_PARAMS['memory_cost']),
            parallelism=params.get('parallelism', KDF_DEFAULT_PARAMS['parallelism'])
        )
        return cls(root_key_source='provided', root_key=root_key)

    def _seal(self, payload: bytes, header: bytes) -> Tuple[bytes, bytes, bytes]:
        nonce = secrets.token_bytes(12)
        cipher = AES.new(self.root_key, AES.MODE_GCM, nonce=nonce)
        cipher.update(header)
        ciphertext, tag = cipher.encrypt_and_digest(payload)
        return ciphertext, tag, nonce

    def _unseal(self, ciphertext: bytes, tag: bytes, nonce: bytes,
                header: bytes, key_id: str) -> bytes:
        """
        Raises:
            ValueError: If authentication fails
        """
        cipher = AES.new(self.root_key, AES.MODE_GCM, nonce=nonce)
        cipher.update(header)
        try:
            return cipher.decrypt_and_verify(ciphertext, tag)
        except ValueError as e:
            raise ValueError(f"Failed to unseal graph '{key_id}': {e}") from e

    def store_graph(self, key_id: str, graph: Graph,
                    metadata: Optional[Dict[str, Any]] = None, version: int = 1) -> None:
        """
        Store a graph key under key_id, replacing any previous entry.
        """
        self.keys[key_id] = StoredGraph(
            id=key_id,
            version=version,
            created_at=int(time.time()),
            graph=Graph.from_dict(graph.to_dict()),
            metadata=dict(metadata or {}),
        )

    def get_graph(self, key_id: str) -> Graph:
        """
        Retrieve a copy of the graph stored under key_id.

        Raises:
            KeyError: If the key is not found
        """
        if key_id not in self.keys:
            raise KeyError(f"Key '{key_id}' not found")
        if self.keys[key_id].metadata.get('deprecated'):
            logger.warning("Graph key '%s' was rotated to '%s'",
                           key_id, self.keys[key_id].metadata.get('rotated_to'))
        return Graph.from_dict(self.keys[key_id].graph.to_dict())

    def rotate_graph(self, key_id: str, new_graph: Graph) -> str:
        """
        Store new_graph as the next version of key_id and deprecate the old one.

        Args:
            key_id: Identifier of the key to rotate
            new_graph: Replacement graph

        Returns:
            The new key ID (key_id.v<version>)

        Raises:
            KeyError: If the key is not found
            ValueError: If key_id was already rotated or its successor ID is taken
        """
        if key_id not in self.keys:
            raise KeyError(f"Key '{key_id}' not found")

        current = self.keys[key_id]
        if current.metadata.get('deprecated'):
            raise ValueError(
                f"Key '{key_id}' was already rotated to '{current.metadata.get('rotated_to')}'"
            )
        new_version = current.version + 1
        base_id = key_id.rsplit('.v', 1)[0] if current.version > 1 else key_id
        new_key_id = f"{base_id}.v{new_version}"
        if new_key_id in self.keys:
            raise ValueError(f"Key '{new_key_id}' already exists")

        metadata = current.metadata.copy()
        metadata.pop('deprecated', None)
        metadata.pop('rotated_to', None)
        metadata['rotated_from'] = key_id
        metadata['rotated_at'] = int(time.time())
        self.store_graph(new_key_id, new_graph, metadata, version=new_version)

        current.metadata['rotated_to'] = new_key_id
        current.metadata['deprecated'] = True

        logger.debug("Rotated graph key '%s' to '%s'", key_id, new_key_id)
        return new_key_id

    def export_sealed(self, key_id: str) -> str:
        """
        Serialize a stored graph as JSON with its body sealed by the root key.

        Raises:
            KeyError: If the key is not found
        """
        if key_id not in self.keys:
            raise KeyError(f"Key '{key_id}' not found")

        stored = self.keys[key_id]
        payload = json.dumps(stored.graph.to_dict()).encode('utf-8')
        header = _record_header(stored.id, stored.version, stored.created_at, stored.metadata)
        ciphertext, tag, nonce = self._seal(payload, header)

        return json.dumps({
            'format': SEALED_FORMAT_VERSION,
            'id': stored.id,
            'version': stored.version,
            'created_at': stored.created_at,
            'metadata': stored.metadata,
            'graph_encrypted': base64.b64encode(ciphertext).decode('utf-8'),
            'graph_tag': base64.b64encode(tag).decode('utf-8'),
            'graph_nonce': base64.b64encode(nonce).decode('utf-8'),
        })

    def import_sealed(self, blob: str) -> str:
        """
        Load a graph exported by export_sealed() into the keyring.

        Returns:
            The imported key ID

        Raises:
            ValueError: If the blob is malformed or fails authentication
        """
        try:
            record = json.loads(blob)
            key_id = record['id']
            version = record['version']
            created_at = record['created_at']
            metadata = record['metadata']
            header = _record_header(key_id, version, created_at, metadata)
            ciphertext = base64.b64decode(record['graph_encrypted'])
            tag = base64.b64decode(record['graph_tag'])
            nonce = base64.b64decode(record['graph_nonce'])
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Malformed sealed graph: {e}") from e

        if record.get('format') != SEALED_FORMAT_VERSION:
            raise ValueError(f"Unsupported sealed graph format: {record.get('format')}")

        payload = self._unseal(ciphertext, tag, nonce, header, key_id)
        graph = Graph.from_dict(json.loads(payload.decode('utf-8')))

        self.keys[key_id] = StoredGraph(
            id=key_id,
            version=version,
            created_at=created_at,
            graph=graph,
            metadata=metadata,
        )
        return key_id
