"""Queue task definitions for the taxonomy remap worker.

This module contains arq task functions for:
    - auto_reseed_task: Run an auto-reseed batch on demand
    - auto_reseed_on_decision_task: Reseed attempt after a review decision
    - scheduled_auto_reseed_task: Cron wrapper for scheduled reseeds
"""
from reclassifier.tasks.reseed_tasks import (
    auto_reseed_task,
    auto_reseed_on_decision_task,
    scheduled_auto_reseed_task,
    ReseedMetrics,
    emit_metric,
)

__all__ = [
    "auto_reseed_task",
    "auto_reseed_on_decision_task",
    "scheduled_auto_reseed_task",
    "ReseedMetrics",
    "emit_metric",
]
