"""Pass registry — every recovery pass is a standalone function registered via decorator.

Usage:
    @recovery_pass(id="R2.02", stage=Stage.BOXES, dependencies=["R2.01"])
    def filled_rectangles(ctx: RecoveryContext) -> None:
        for (x, y, w, h) in candidates(ctx):
            ctx.try_claim(DrawCall(FILL_RECT, (x, y, w, h)))

Passes claim pixels destructively, so each one names the pass it must follow
and the registry resolves the order. Adding a pass = creating one file with
the decorator.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from oledsketch.engine.context import RecoveryContext

logger = logging.getLogger(__name__)


class Stage(enum.IntEnum):
    CURVES = 1
    BOXES = 2
    RUNS = 3
    FALLBACK = 4


@dataclass
class PassSpec:
    id: str
    stage: Stage
    fn: Callable[["RecoveryContext"], None]
    dependencies: list[str] = field(default_factory=list)
    description: str = ""


class PassRegistry:
    """Registry of detect-and-erase passes."""

    def __init__(self) -> None:
        self._passes: dict[str, PassSpec] = {}

    def register(self, spec: PassSpec) -> None:
        if spec.id in self._passes:
            raise ValueError(f"Duplicate pass ID: {spec.id}")
        self._passes[spec.id] = spec
        logger.debug("Registered pass %s (%s)", spec.id, spec.stage.name)

    def get(self, pass_id: str) -> PassSpec:
        return self._passes[pass_id]

    def get_stage(self, stage: Stage) -> list[PassSpec]:
        specs = [s for s in self._passes.values() if s.stage == stage]
        return sorted(specs, key=lambda s: s.id)

    def all(self) -> list[PassSpec]:
        return sorted(self._passes.values(), key=lambda s: (s.stage, s.id))

    def resolve_order(self, requested_ids: set[str] | None = None) -> list[PassSpec]:
        """Topological sort respecting dependencies. If requested_ids is None, run all.

        Unlike a plain filter, skipping a pass keeps its dependants ordered
        after its own dependencies.
        """
        pool = self._passes
        if requested_ids is not None:
            pool = {k: v for k, v in pool.items() if k in requested_ids}

        def effective_deps(spec: PassSpec) -> set[str]:
            # Walk through skipped passes to the nearest requested ancestors.
            deps: set[str] = set()
            stack = list(spec.dependencies)
            seen: set[str] = set()
            while stack:
                dep = stack.pop()
                if dep in seen:
                    continue
                seen.add(dep)
                if dep in pool:
                    deps.add(dep)
                elif dep in self._passes:
                    stack.extend(self._passes[dep].dependencies)
            return deps

        deps_of = {pid: effective_deps(spec) for pid, spec in pool.items()}

        # Kahn's algorithm
        in_degree: dict[str, int] = {pid: len(deps) for pid, deps in deps_of.items()}
        sort_key = {pid: (spec.stage, pid) for pid, spec in pool.items()}
        queue = sorted([pid for pid, d in in_degree.items() if d == 0], key=sort_key.get)
        ordered: list[PassSpec] = []

        while queue:
            pid = queue.pop(0)
            ordered.append(pool[pid])
            for other_id, deps in deps_of.items():
                if pid in deps:
                    in_degree[other_id] -= 1
                    if in_degree[other_id] == 0:
                        queue.append(other_id)
                        queue.sort(key=sort_key.get)

        if len(ordered) != len(pool):
            missing = set(pool.keys()) - {s.id for s in ordered}
            raise ValueError(f"Circular dependency detected among: {missing}")

        return ordered

    @property
    def count(self) -> int:
        return len(self._passes)


# Module-level singleton
_registry = PassRegistry()


def get_registry() -> PassRegistry:
    return _registry


def recovery_pass(
    *,
    id: str,
    stage: Stage,
    dependencies: list[str] | None = None,
    description: str = "",
):
    """Decorator to register a recovery pass."""

    def decorator(fn: Callable[["RecoveryContext"], None]):
        spec = PassSpec(
            id=id,
            stage=stage,
            fn=fn,
            dependencies=dependencies or [],
            description=description,
        )
        _registry.register(spec)
        return fn

    return decorator
