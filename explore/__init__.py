# ================================
# file: explore/__init__.py
# ================================
"""
Exploration Package

Exports:
- ExplorationOrchestrator: run configuration and concurrent control loop
- CoverageMonitor / CountdownTimer: the two termination sources
- TerminationState: single termination variant shared between them
- Explorer / SweepExplorer: explorer service contract and reference sweep
"""
from explore.termination import TerminationState, TerminationReason
from explore.countdown_timer import CountdownTimer
from explore.coverage_monitor import CoverageMonitor
from explore.explorer import Explorer
from explore.sweep_explorer import SweepExplorer
from explore.orchestrator import ExplorationOrchestrator, ExplorationState, ExplorationSession

__all__ = [
    'TerminationState', 'TerminationReason',
    'CountdownTimer', 'CoverageMonitor',
    'Explorer', 'SweepExplorer',
    'ExplorationOrchestrator', 'ExplorationState', 'ExplorationSession',
]
