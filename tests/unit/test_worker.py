"""Unit tests for worker.py configuration."""
from unittest.mock import AsyncMock, patch

import pytest

from reclassifier.services.classification.evidence_index import TaxonomyIndex
from reclassifier.tasks.reseed_tasks import (
    auto_reseed_on_decision_task,
    auto_reseed_task,
    scheduled_auto_reseed_task,
)
from reclassifier.worker import WorkerSettings, get_cron_schedule, shutdown, startup


class TestCronSchedule:
    """Test get_cron_schedule."""

    @pytest.mark.parametrize("interval,expected", [
        (30, {"minute": {0, 30}}),
        (1, {"minute": set(range(60))}),
        (60, {"hour": set(range(24)), "minute": 0}),
        (120, {"hour": set(range(0, 24, 2)), "minute": 0}),
        (15, {"minute": {0, 15, 30, 45}}),
        (1440, {"hour": {0}, "minute": 0}),
    ])
    def test_schedule(self, interval, expected):
        assert get_cron_schedule(interval) == expected

    @pytest.mark.parametrize("interval", [45, 90, 420])
    def test_uneven_interval_rejected(self, interval):
        with pytest.raises(ValueError):
            get_cron_schedule(interval)


class TestWorkerSettings:
    """Test WorkerSettings."""

    def test_functions_registered(self):
        assert WorkerSettings.functions == [auto_reseed_task, auto_reseed_on_decision_task]

    def test_cron_job(self):
        assert len(WorkerSettings.cron_jobs) == 1
        job = WorkerSettings.cron_jobs[0]
        assert job.coroutine is scheduled_auto_reseed_task
        assert job.unique is True
        assert job.run_at_startup is False

    def test_runs_are_not_retried(self):
        assert WorkerSettings.max_tries == 1


class TestLifecycleHooks:
    """Test startup/shutdown hooks."""

    @pytest.mark.asyncio
    async def test_startup_builds_index(self):
        ctx = {}

        await startup(ctx)

        assert isinstance(ctx["taxonomy_index"], TaxonomyIndex)
        assert "camisas_y_blusas" in ctx["taxonomy_index"].category_keys()

    @pytest.mark.asyncio
    async def test_shutdown_disposes_engine(self):
        with patch("reclassifier.worker.engine") as engine:
            engine.dispose = AsyncMock()

            await shutdown({})

        engine.dispose.assert_awaited_once()
