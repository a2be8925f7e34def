"""Soft-selection falloff curves."""

import math
from enum import Enum
from typing import Union

import torch

from ..utils.config import DEFAULT_MODE


class FalloffMode(str, Enum):
    """Curve shapes mapping normalized distance to an influence weight."""

    LINEAR = "linear"
    SMOOTH = "smooth"
    CUBIC = "cubic"

    @classmethod
    def parse(cls, mode: Union["FalloffMode", str, None]) -> "FalloffMode":
        """Accept an enum member or a case-insensitive name."""
        if mode is None:
            return cls(DEFAULT_MODE)
        if isinstance(mode, cls):
            return mode
        try:
            return cls(str(mode).strip().lower())
        except ValueError:
            names = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown falloff mode: {mode!r} (expected one of {names})") from None


def _check_radius(radius: float) -> float:
    radius = float(radius)
    if not radius > 0.0:
        raise ValueError(f"Falloff radius must be > 0, got {radius}")
    return radius


def _curve(x, mode: FalloffMode):
    if mode is FalloffMode.LINEAR:
        return x
    if mode is FalloffMode.CUBIC:
        return x * x * x
    # Hermite smoothstep: zero slope at both ends
    return x * x * (3 - 2 * x)


def falloff(distance: float, radius: float = 2.0, mode=FalloffMode.SMOOTH) -> float:
    """
    Influence weight in [0, 1] for a vertex ``distance`` away from the anchor.

    Weight is 1 at distance 0 and drops to exactly 0 at ``distance >= radius``
    (half-open support ``[0, radius)``).

    Args:
        distance: non-negative distance to the anchor
        radius: falloff radius, must be > 0
        mode: ``FalloffMode`` or one of ``"linear" | "smooth" | "cubic"``

    Returns:
        weight: float in [0, 1]
    """
    radius = _check_radius(radius)
    mode = FalloffMode.parse(mode)

    distance = float(distance)
    if not math.isfinite(distance) or distance < 0.0:
        raise ValueError(f"Falloff distance must be finite and >= 0, got {distance}")
    if distance >= radius:
        return 0.0

    x = 1.0 - distance / radius
    return float(_curve(x, mode))


def falloff_weights(distances: torch.Tensor, radius: float = 2.0, mode=FalloffMode.SMOOTH) -> torch.Tensor:
    """Element-wise :func:`falloff` over a tensor of distances."""
    radius = _check_radius(radius)
    mode = FalloffMode.parse(mode)
    if not bool(torch.isfinite(distances).all()) or bool((distances < 0).any()):
        raise ValueError("Falloff distances must be finite and >= 0")

    x = 1.0 - distances / radius
    w = _curve(x, mode)
    return torch.where(distances < radius, w, torch.zeros_like(w))
