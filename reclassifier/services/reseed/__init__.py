"""Auto-reseed: batch runs that turn classification signals into pending proposals.

Key Components:
    - run_auto_reseed_batch: One admitted, audited execution
    - run_lifecycle: Running-row mutual exclusion, watchdog and phase state
    - proposal_store: Candidate selection and chunked proposal writes
"""
from reclassifier.services.reseed.batch import run_auto_reseed_batch, score_product, default_index
from reclassifier.services.reseed.run_lifecycle import (
    get_phase_state,
    mark_stale_runs,
    force_recover_runs,
    create_run,
    finalize_run,
)
from reclassifier.services.reseed.status_cache import store_last_result, get_last_result

__all__ = [
    "run_auto_reseed_batch",
    "score_product",
    "default_index",
    "get_phase_state",
    "mark_stale_runs",
    "force_recover_runs",
    "create_run",
    "finalize_run",
    "store_last_result",
    "get_last_result",
]
