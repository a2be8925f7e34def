"""Common utility functions."""

import numpy as np
import torch


def ensure_torch(x, device='cpu', dtype=torch.float32):
    """Convert array-like to torch tensor on the given device/dtype."""
    if torch.is_tensor(x):
        if x.device == torch.device(device) and x.dtype == dtype:
            return x
        return x.to(device=device, dtype=dtype)
    return torch.from_numpy(np.asarray(x)).to(device=device, dtype=dtype)


def as_numpy(a):
    """Convert to numpy array."""
    if isinstance(a, torch.Tensor):
        return a.detach().cpu().numpy()
    return np.asarray(a)


def as_vec3(v, like: torch.Tensor, name: str = "vector") -> torch.Tensor:
    """Coerce ``v`` to a finite (3,) tensor matching ``like``'s device/dtype."""
    t = ensure_torch(v, device=like.device, dtype=like.dtype).reshape(-1)
    if t.numel() != 3:
        raise ValueError(f"{name} must have 3 components, got {t.numel()}")
    if not bool(torch.isfinite(t).all()):
        raise ValueError(f"{name} must be finite, got {t.tolist()}")
    return t


def all_finite(x: torch.Tensor) -> bool:
    """True when every element is finite (empty tensors count as finite)."""
    return bool(torch.isfinite(x).all())
