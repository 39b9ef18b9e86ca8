"""Tests for chamelo.dispatch module."""

import numpy as np
import pytest

from chamelo.colors import RGB
from chamelo.dispatch import ExtractionWorker
from chamelo.errors import ConfigurationError, WorkerError
from chamelo.palette import ExtractionOptions, extract_palette


class TestExtractionWorkerLifecycle:
    """Test start/terminate handling."""

    def test_not_running_until_started(self):
        """Test that a new worker holds no pool."""
        worker = ExtractionWorker(executor="thread")
        assert not worker.is_running

    def test_submit_before_start_raises(self, solid_rgba):
        """Test that using an unstarted worker is an error."""
        worker = ExtractionWorker(executor="thread")
        with pytest.raises(WorkerError, match="start"):
            worker.submit(solid_rgba(2, 2, (10, 20, 30)), 2, 2)

    def test_submit_after_terminate_raises(self, solid_rgba):
        """Test that a terminated worker refuses new work."""
        worker = ExtractionWorker(executor="thread").start()
        worker.terminate()
        assert not worker.is_running
        with pytest.raises(WorkerError):
            worker.extract(solid_rgba(2, 2, (10, 20, 30)), 2, 2)

    def test_terminate_is_idempotent(self):
        """Test that terminating twice is harmless."""
        worker = ExtractionWorker(executor="thread").start()
        worker.terminate()
        worker.terminate()

    def test_start_is_idempotent(self):
        """Test that starting a running worker keeps its pool."""
        with ExtractionWorker(executor="thread") as worker:
            pool = worker._executor
            worker.start()
            assert worker._executor is pool

    def test_context_manager(self):
        """Test that the context manager starts and terminates the pool."""
        with ExtractionWorker(executor="thread") as worker:
            assert worker.is_running
        assert not worker.is_running

    @pytest.mark.parametrize(
        "kwargs", [{"max_workers": 0}, {"executor": "gpu"}]
    )
    def test_invalid_configuration(self, kwargs):
        """Test that bad constructor arguments are rejected."""
        with pytest.raises(ConfigurationError):
            ExtractionWorker(**kwargs)


class TestExtractionWorkerResults:
    """Test extraction through the worker."""

    def test_solid_image(self, solid_rgba):
        """Test a solid image through a thread pool."""
        with ExtractionWorker(executor="thread") as worker:
            palette = worker.extract(solid_rgba(10, 10, (255, 0, 0)), 10, 10, color_count=3)
        assert [(c.rgb, c.percentage) for c in palette] == [(RGB(255, 0, 0), 100.0)]

    def test_matches_direct_call_for_same_seed(self, striped_rgba):
        """Test that dispatching does not change the result."""
        pixels = striped_rgba(
            8, 8, [(200, 30, 30), (30, 200, 30), (30, 30, 200), (120, 120, 40)]
        )
        options = ExtractionOptions(color_count=3)
        direct = extract_palette(pixels, 8, 8, options, rng=np.random.default_rng(5))
        with ExtractionWorker(executor="thread") as worker:
            dispatched = worker.extract(pixels, 8, 8, options, seed=5)
        assert dispatched == direct

    def test_submit_returns_future(self, solid_rgba):
        """Test the non-blocking interface."""
        with ExtractionWorker(max_workers=2, executor="thread") as worker:
            futures = [
                worker.submit(solid_rgba(4, 4, rgb), 4, 4)
                for rgb in [(200, 0, 0), (0, 200, 0)]
            ]
            results = [future.result(timeout=30) for future in futures]
        assert [palette[0].hex for palette in results] == ["#c80000", "#00c800"]

    def test_invalid_options_raise_immediately(self, solid_rgba):
        """Test that configuration errors surface on the calling side."""
        with ExtractionWorker(executor="thread") as worker:
            with pytest.raises(ConfigurationError):
                worker.submit(solid_rgba(2, 2, (10, 20, 30)), 2, 2, color_count=0)

    def test_process_pool(self, solid_rgba):
        """Test extraction in a separate process."""
        with ExtractionWorker(executor="process") as worker:
            palette = worker.extract(
                solid_rgba(6, 6, (30, 60, 90)), 6, 6, seed=1, timeout=60
            )
        assert [c.hex for c in palette] == ["#1e3c5a"]
