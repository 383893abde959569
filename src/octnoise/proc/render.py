from __future__ import annotations

import logging
from typing import Any

import numpy as np
import torch

from octnoise.core.errors import NotBuiltError
from .api import NoiseModule

log = logging.getLogger(__name__)

Bounds = tuple[float, float, float, float]  # x0, x1, y0, y1


def grid(h: int, w: int, *, bounds: Bounds = (-1.0, 1.0, -1.0, 1.0), dtype=None):
    """Sample-point grid over ``bounds``; returns ``(xx, yy)`` of shape ``[h, w]``."""
    if dtype is None:
        dtype = torch.float64
    x0, x1, y0, y1 = bounds
    yy, xx = torch.meshgrid(
        torch.linspace(y0, y1, h, dtype=dtype),
        torch.linspace(x0, x1, w, dtype=dtype),
        indexing="ij",
    )
    return xx, yy


def sample_array(module: NoiseModule, x: Any, y: Any, z: Any = 0.0) -> np.ndarray:
    """Evaluate ``module.sample`` on numpy-broadcast coordinates (float64 result)."""
    xb, yb, zb = np.broadcast_arrays(
        np.asarray(x, dtype=np.float64),
        np.asarray(y, dtype=np.float64),
        np.asarray(z, dtype=np.float64),
    )
    out = np.empty(xb.shape, dtype=np.float64)
    it = np.nditer([xb, yb, zb, out], op_flags=[["readonly"]] * 3 + [["writeonly"]])
    with it:
        for xv, yv, zv, ov in it:
            ov[...] = module.sample(float(xv), float(yv), float(zv))
    return out


@torch.no_grad()
def render(
    module: NoiseModule,
    tiles_hw: tuple[int, int],
    *,
    bounds: Bounds = (-1.0, 1.0, -1.0, 1.0),
    z: float = 0.0,
    dtype: torch.dtype = torch.float32,
) -> torch.Tensor:
    """Render one ``[1, 1, h, w]`` tile of a built module on the plane ``z``.
    Values are not clamped.

    Sampling is scalar Python over a numpy view of the ``grid`` points;
    torch only holds the coordinates and the returned tile.
    """
    is_built = getattr(module, "is_built", True)
    if not is_built:
        raise NotBuiltError(f"{module.info.name}: build() before render()")
    h, w = tiles_hw
    xx, yy = grid(h, w, bounds=bounds)
    vals = sample_array(module, xx.numpy(), yy.numpy(), z)
    log.debug("render %s %dx%d bounds=%s z=%s", module.info.name, h, w, bounds, z)
    return torch.from_numpy(vals).to(dtype=dtype).view(1, 1, h, w)
