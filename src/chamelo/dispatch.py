"""Off-thread palette extraction.

``ExtractionWorker`` is an explicit resource owned by the caller: it is
created, started, used and terminated like any other executor-backed object,
and holds no global state. The extraction itself is the same pure
``extract_palette`` call; the worker only marshals the pixel buffer and
options to a ``concurrent.futures`` pool and hands back a future.

Example:
    >>> from chamelo import load_pixels  # doctest: +SKIP
    >>> buffer = load_pixels("photo.jpg")  # doctest: +SKIP
    >>> with ExtractionWorker() as worker:  # doctest: +SKIP
    ...     palette = worker.extract(buffer.data, buffer.width, buffer.height)
"""

import dataclasses
import logging
from concurrent.futures import (
    Executor,
    Future,
    ProcessPoolExecutor,
    ThreadPoolExecutor,
)
from typing import Any, Literal

import numpy as np

from .errors import ConfigurationError, WorkerError
from .palette import ExtractedColor, ExtractionOptions, extract_palette

__all__ = ["ExtractionWorker", "ExecutorKind"]

logger = logging.getLogger(__name__)

ExecutorKind = Literal["process", "thread"]


def _run_extraction(
    data: bytes,
    width: int,
    height: int,
    options: ExtractionOptions,
    seed: int | None,
) -> list[ExtractedColor]:
    """Worker entry point; module level so process pools can pickle it."""
    rng = np.random.default_rng(seed)
    return extract_palette(data, width, height, options, rng=rng)


class ExtractionWorker:
    """Runs palette extraction on a process or thread pool.

    Args:
        max_workers: Number of pool workers.
        executor: ``"process"`` to sidestep the GIL for CPU-bound work,
            ``"thread"`` for cheap startup when extraction is short.
    """

    def __init__(self, max_workers: int = 1, executor: ExecutorKind = "process"):
        if max_workers < 1:
            raise ConfigurationError(f"max_workers must be >= 1, got {max_workers}")
        if executor not in ("process", "thread"):
            raise ConfigurationError(
                f"executor must be 'process' or 'thread', got {executor!r}"
            )
        self.max_workers = max_workers
        self.executor_kind = executor
        self._executor: Executor | None = None

    @property
    def is_running(self) -> bool:
        return self._executor is not None

    def start(self) -> "ExtractionWorker":
        """Create the underlying pool. Starting a running worker is a no-op."""
        if self._executor is None:
            if self.executor_kind == "process":
                self._executor = ProcessPoolExecutor(max_workers=self.max_workers)
            else:
                self._executor = ThreadPoolExecutor(max_workers=self.max_workers)
            logger.debug(
                "Started %s extraction worker with %d workers",
                self.executor_kind,
                self.max_workers,
            )
        return self

    def terminate(self, wait: bool = True) -> None:
        """Shut the pool down. Safe to call more than once."""
        if self._executor is not None:
            self._executor.shutdown(wait=wait, cancel_futures=not wait)
            self._executor = None
            logger.debug("Terminated %s extraction worker", self.executor_kind)

    def submit(
        self,
        pixels: Any,
        width: int,
        height: int,
        options: ExtractionOptions | None = None,
        *,
        seed: int | None = None,
        **overrides: Any,
    ) -> "Future[list[ExtractedColor]]":
        """Queue an extraction and return its future.

        Options are validated here, on the calling side, so configuration
        mistakes raise immediately instead of through the future. ``seed`` pins
        the k-means++ draws for reproducible results.

        Raises:
            WorkerError: If the worker has not been started or was terminated.
            ConfigurationError: On invalid options.
        """
        if self._executor is None:
            raise WorkerError("Extraction worker is not running; call start() first")

        if options is None:
            options = ExtractionOptions(**overrides)
        elif overrides:
            options = dataclasses.replace(options, **overrides)

        if isinstance(pixels, (bytes, bytearray, memoryview)):
            data = bytes(pixels)
        else:
            data = np.asarray(pixels, dtype=np.uint8).tobytes()

        return self._executor.submit(_run_extraction, data, width, height, options, seed)

    def extract(
        self,
        pixels: Any,
        width: int,
        height: int,
        options: ExtractionOptions | None = None,
        *,
        seed: int | None = None,
        timeout: float | None = None,
        **overrides: Any,
    ) -> list[ExtractedColor]:
        """Submit an extraction and block until its palette is ready."""
        future = self.submit(pixels, width, height, options, seed=seed, **overrides)
        return future.result(timeout=timeout)

    def __enter__(self) -> "ExtractionWorker":
        return self.start()

    def __exit__(self, *exc_info: Any) -> None:
        self.terminate()
