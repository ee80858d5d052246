"""oledsketch drawing-call engine."""

from oledsketch.engine.registry import recovery_pass, Stage, get_registry
from oledsketch.engine.context import RecoveryContext, Claim
from oledsketch.engine.pipeline import RecoveryPipeline

__all__ = [
    "recovery_pass",
    "Stage",
    "get_registry",
    "RecoveryContext",
    "Claim",
    "RecoveryPipeline",
]
