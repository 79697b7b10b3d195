"""
Metric collectors, one per external tool or filesystem check.

Every collector returns usable metrics under all inputs: tool and parse
failures degrade to documented fallback values instead of propagating.
"""

from .agents import AgentUsageCollector
from .base import MetricCollector
from .gate import GateCollector, find_gate_spec
from .quality import ComplexityCollector, DuplicationCollector, StyleCollector
from .suite import CoverageCollector, SpecRunCollector, collect_suite, discover_team_specs

__all__ = [
    "AgentUsageCollector",
    "ComplexityCollector",
    "CoverageCollector",
    "DuplicationCollector",
    "GateCollector",
    "MetricCollector",
    "SpecRunCollector",
    "StyleCollector",
    "collect_suite",
    "discover_team_specs",
    "find_gate_spec",
]
