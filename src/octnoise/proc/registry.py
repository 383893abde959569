from __future__ import annotations

import logging
from typing import Callable

from octnoise.core.errors import UnknownModuleError
from .api import Basis, ModuleInfo, NoiseModule

log = logging.getLogger(__name__)

BasisFactory = Callable[[], Basis]
ModuleFactory = Callable[[], NoiseModule]

_BASES: dict[str, BasisFactory] = {}
_REG: dict[str, ModuleFactory] = {}


def register_basis(name: str, factory: BasisFactory) -> None:
    _BASES[name] = factory
    log.debug("registered basis %s", name)


def get_basis(name: str) -> BasisFactory:
    try:
        return _BASES[name]
    except KeyError as exc:
        raise UnknownModuleError(f"Unknown basis: {name}") from exc


def list_bases() -> list[str]:
    return sorted(_BASES)


def register(factory: ModuleFactory) -> None:
    """Register a module class (or any factory exposing ``.info``) under its info name."""
    name = factory.info.name  # type: ignore[attr-defined]
    _REG[name] = factory
    log.debug("registered module %s", name)


def get(name: str) -> NoiseModule:
    """Fresh, unbuilt instance of the module registered as ``name``."""
    try:
        factory = _REG[name]
    except KeyError as exc:
        raise UnknownModuleError(f"Unknown module: {name}") from exc
    return factory()


def list_modules() -> list[ModuleInfo]:
    return [f.info for f in _REG.values()]  # type: ignore[attr-defined]
