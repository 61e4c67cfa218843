# backend.py
"""
numpy / torch state containers.

The step methods only use ``+`` and ``*`` on states, so one implementation
serves ndarrays and tensors alike.  The few places where the two libraries
differ (allocation, conversion, finiteness) live here.  Every state is
float64; torch states keep the device of the initial condition.
"""
import math
import numpy as np
import torch


def is_torch(x) -> bool:
    return isinstance(x, torch.Tensor)


def as_state(u0):
    """Float64 copy of an initial condition (tensor in, tensor out)."""
    if is_torch(u0):
        return u0.to(dtype=torch.float64).clone()
    return np.array(u0, dtype=np.float64)


def as_like(value, like):
    """Convert an RHS / step result to the array type of ``like``."""
    if is_torch(like):
        if isinstance(value, (list, tuple)):
            return torch.stack([torch.as_tensor(v, dtype=torch.float64,
                                                device=like.device)
                                for v in value])
        return torch.as_tensor(value, dtype=torch.float64, device=like.device)
    if is_torch(value):
        value = value.detach().cpu().numpy()
    return np.asarray(value, dtype=np.float64)


def new_history(u0, length: int):
    """NaN-filled buffer of ``length`` entries shaped like ``u0``."""
    if is_torch(u0):
        return torch.full((length,) + tuple(u0.shape), math.nan,
                          dtype=torch.float64, device=u0.device)
    return np.full((length,) + np.shape(u0), np.nan, dtype=np.float64)


def shape_of(x) -> tuple:
    if is_torch(x):
        return tuple(x.shape)
    return tuple(np.shape(x))


def is_finite(x) -> bool:
    if is_torch(x):
        return bool(torch.isfinite(x).all().item())
    return bool(np.all(np.isfinite(x)))


def copy(x):
    if is_torch(x):
        return x.clone()
    return np.array(x, dtype=np.float64)


def stack(items, like):
    """Assemble a state vector from its components."""
    if is_torch(like):
        return torch.stack([torch.as_tensor(v, dtype=torch.float64,
                                            device=like.device)
                            for v in items])
    return np.array(items, dtype=np.float64)


def to_numpy(x) -> np.ndarray:
    if is_torch(x):
        return x.detach().cpu().numpy()
    return np.asarray(x, dtype=np.float64)
