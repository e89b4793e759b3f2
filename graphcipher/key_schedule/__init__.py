"""
Key Schedule Package

This package turns a labeled graph into the key polynomial and the
keystream used by the cipher rounds.
"""

from .graph_key_schedule import (
    Graph,
    KeySchedule,
    derive_key,
    derive_keystream,
    derive_schedule,
    inv_odd,
    odd,
)

__all__ = [
    'Graph',
    'KeySchedule',
    'derive_key',
    'derive_keystream',
    'derive_schedule',
    'inv_odd',
    'odd',
]
