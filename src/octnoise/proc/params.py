from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from octnoise.core.errors import InvalidParamsError
from .api import ModuleInfo, ParamDict, ParamSpec

log = logging.getLogger(__name__)


@dataclass
class ParamCodec:
    """Dict view of a module's parameters, driven by ``ModuleInfo.param_specs``."""

    info: ModuleInfo

    def _specs(self) -> dict[str, ParamSpec]:
        return {p.name: p for p in self.info.param_specs}

    # -------------------------
    # Validation
    # -------------------------
    def validate(self, params: ParamDict, *, strict: bool = False, require_all: bool = False) -> ParamDict:
        """Reject unknown keys, uncastable values and enum misses; return the values
        cast to their ParamSpec type (enum choices lowercased).

        ``strict`` also enforces each ParamSpec's recommended range;
        ``require_all`` demands a value for every ParamSpec.
        """
        specs = self._specs()
        out: ParamDict = {}
        for k, v in params.items():
            if k not in specs:
                raise InvalidParamsError(f"Unknown param '{k}' for {self.info.name}")
            p = specs[k]
            if p.type in ("float", "int"):
                try:
                    x = float(v) if p.type == "float" else int(v)
                except (TypeError, ValueError) as exc:
                    raise InvalidParamsError(f"{k}={v!r} is not a valid {p.type}") from exc
                if strict and p.range is not None:
                    lo, hi = p.range
                    if not (float(lo) <= x <= float(hi)):
                        raise InvalidParamsError(f"{k}={x} not in [{lo}, {hi}]")
                out[k] = x
            elif p.type == "enum":
                if p.enum is None:
                    raise InvalidParamsError(f"{k} is enum but has no choices")
                if _choice(v) not in p.enum:
                    raise InvalidParamsError(f"{k}={v!r} not in {p.enum}")
                out[k] = _choice(v)
            elif p.type == "str":
                if not isinstance(v, str) or not v:
                    raise InvalidParamsError(f"{k} must be a non-empty string")
                out[k] = v
            elif p.type == "bool":
                out[k] = bool(v)
            else:
                raise InvalidParamsError(f"Unsupported param type '{p.type}' for {k}")

        if require_all:
            for p in self.info.param_specs:
                if p.name not in params:
                    raise InvalidParamsError(f"Missing required param '{p.name}'")
        return out

    # -------------------------
    # Module <-> dict
    # -------------------------
    def apply(self, module: Any, params: ParamDict, *, strict: bool = False) -> Any:
        """Validate ``params`` then assign them through the module's setters."""
        for k, v in self.validate(params, strict=strict).items():
            setattr(module, k, v)
        log.debug("%s: applied %s", self.info.name, ", ".join(sorted(params)))
        return module

    def snapshot(self, module: Any) -> ParamDict:
        out: ParamDict = {}
        for p in self.info.param_specs:
            out[p.name] = _plain(getattr(module, p.name))
        return out

    # -------------------------
    # Small exploration grid (optional)
    # -------------------------
    def grid(self) -> list[ParamDict]:
        """Mid-range point plus a low-edge variant for every float/int with a range.
        Params without a range or choices are left out.
        """
        mid: ParamDict = {}
        for p in self.info.param_specs:
            if p.type in ("float", "int") and p.range is not None:
                lo, hi = p.range
                x = (float(lo) + float(hi)) / 2.0
                mid[p.name] = int(round(x)) if p.type == "int" else x
            elif p.type == "enum" and p.enum is not None:
                mid[p.name] = p.enum[0]
            elif p.type == "bool":
                mid[p.name] = False

        edge = dict(mid)
        for p in self.info.param_specs:
            if p.type in ("float", "int") and p.range is not None:
                edge[p.name] = p.range[0]
        return [mid, edge]


def _plain(v: Any) -> Any:
    # enums travel by value/name so dicts stay plain data
    if isinstance(v, Enum):
        return v.value if isinstance(v.value, str) else v.name.lower()
    return v


def _choice(v: Any) -> Any:
    v = _plain(v)
    return v.lower() if isinstance(v, str) else v
