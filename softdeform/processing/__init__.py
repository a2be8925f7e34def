"""
Vertex processing operations.

Includes:
- Displacement propagation to proximity neighbours
"""

from .propagation import apply_displacement

__all__ = [
    "apply_displacement",
]
