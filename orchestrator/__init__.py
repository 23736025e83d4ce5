"""
Orchestration package for coordinating sync runs.

Sequences the pipeline phases (Fetch → Resolve → Render → Materialize) and
reports one outcome per written file.
"""

from .sync_orchestrator import SyncOrchestrator
from .sync_report import SyncReport

__all__ = [
    'SyncOrchestrator',
    'SyncReport'
]
