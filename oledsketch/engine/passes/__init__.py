"""Shape-recovery passes. Each module registers one pass on import."""

from __future__ import annotations

import importlib
import pkgutil


def register_passes() -> None:
    """Import all pass modules so @recovery_pass decorators fire."""
    for _, module_name, _ in pkgutil.iter_modules(__path__):
        importlib.import_module(f"{__name__}.{module_name}")
