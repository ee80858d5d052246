"""Tests for the pass registry."""

from __future__ import annotations

import pytest

from oledsketch.engine.context import RecoveryContext
from oledsketch.engine.passes import register_passes
from oledsketch.engine.registry import PassRegistry, PassSpec, Stage, get_registry


def _noop(ctx: RecoveryContext) -> None:
    pass


def test_register_and_get():
    reg = PassRegistry()
    spec = PassSpec(id="R1.01", stage=Stage.CURVES, fn=_noop)
    reg.register(spec)
    assert reg.get("R1.01") is spec
    assert reg.count == 1


def test_duplicate_id_rejected():
    reg = PassRegistry()
    reg.register(PassSpec(id="R1.01", stage=Stage.CURVES, fn=_noop))
    with pytest.raises(ValueError, match="Duplicate"):
        reg.register(PassSpec(id="R1.01", stage=Stage.CURVES, fn=_noop))


def test_get_stage():
    reg = PassRegistry()
    reg.register(PassSpec(id="R1.01", stage=Stage.CURVES, fn=_noop))
    reg.register(PassSpec(id="R2.01", stage=Stage.BOXES, fn=_noop))
    curves = reg.get_stage(Stage.CURVES)
    assert len(curves) == 1
    assert curves[0].id == "R1.01"


def test_resolve_order_with_deps():
    reg = PassRegistry()
    # Registered out of order on purpose.
    reg.register(PassSpec(id="R1.02", stage=Stage.CURVES, fn=_noop, dependencies=["R2.01"]))
    reg.register(PassSpec(id="R2.01", stage=Stage.BOXES, fn=_noop))
    ids = [s.id for s in reg.resolve_order()]
    assert ids == ["R2.01", "R1.02"]


def test_resolve_order_skips_through_missing_pass():
    reg = PassRegistry()
    reg.register(PassSpec(id="A", stage=Stage.RUNS, fn=_noop, dependencies=["C"]))
    reg.register(PassSpec(id="B", stage=Stage.RUNS, fn=_noop, dependencies=["A"]))
    reg.register(PassSpec(id="C", stage=Stage.CURVES, fn=_noop))
    ids = [s.id for s in reg.resolve_order({"B", "C"})]
    assert ids == ["C", "B"]


def test_resolve_order_detects_cycle():
    reg = PassRegistry()
    reg.register(PassSpec(id="A", stage=Stage.CURVES, fn=_noop, dependencies=["B"]))
    reg.register(PassSpec(id="B", stage=Stage.CURVES, fn=_noop, dependencies=["A"]))
    with pytest.raises(ValueError, match="Circular"):
        reg.resolve_order()


def test_all_passes_registered():
    register_passes()
    reg = get_registry()
    assert reg.count == 10
    assert [s.stage for s in reg.all()] == sorted(s.stage for s in reg.all())
