"""
Fixed-size pool of independently loaded engine instances.

Engines are stateless after load, so duplicating them is safe. Each
instance is leased to at most one caller at a time; with size 1 the pool
is simply a lock around a single engine.
"""

import queue
import threading
from contextlib import contextmanager
from typing import Callable, Iterator, Optional, Sequence

import numpy as np
import structlog

from intent_classifier.engine.base_engine import BaseInferenceEngine
from intent_classifier.exceptions import EngineNotInitializedError


logger = structlog.get_logger(__name__)


class EnginePool:
    """
    Serializes access to engine instances.

    Usage:
        pool = EnginePool(lambda: TFLiteEngine(path), size=2)
        pool.load()
        scores = pool.run(sequence)  # blocks until an instance is free
        pool.close()
    """

    def __init__(self, engine_factory: Callable[[], BaseInferenceEngine], size: int = 1):
        if size < 1:
            raise ValueError(f"Pool size must be >= 1, got {size}")
        self._engine_factory = engine_factory
        self.size = size
        self._engines: list[BaseInferenceEngine] = []
        # None in the queue is the "closed" sentinel for blocked callers
        self._idle: "queue.Queue[Optional[BaseInferenceEngine]]" = queue.Queue()
        self._lock = threading.Lock()
        self._closed = False

    def load(self) -> None:
        """
        Create and load every instance.

        On failure, instances loaded so far are closed and the error is
        re-raised unchanged.
        """
        with self._lock:
            if self._engines:
                return
            loaded: list[BaseInferenceEngine] = []
            try:
                for _ in range(self.size):
                    engine = self._engine_factory()
                    engine.load()
                    loaded.append(engine)
            except Exception:
                for engine in loaded:
                    engine.close()
                raise

            self._engines = loaded
            for engine in loaded:
                self._idle.put(engine)

        logger.info("Engine pool ready", size=self.size, backend=loaded[0].backend_name)

    @property
    def is_loaded(self) -> bool:
        return bool(self._engines) and not self._closed

    @property
    def backend_name(self) -> Optional[str]:
        return self._engines[0].backend_name if self._engines else None

    @property
    def input_size(self) -> Optional[int]:
        return self._engines[0].input_size if self._engines else None

    @property
    def output_size(self) -> Optional[int]:
        return self._engines[0].output_size if self._engines else None

    @contextmanager
    def lease(self) -> Iterator[BaseInferenceEngine]:
        """
        Borrow one engine for exclusive use.

        The engine is returned to the pool on every exit path.

        Raises:
            EngineNotInitializedError: Pool not loaded or already closed
        """
        if self._closed or not self._engines:
            raise EngineNotInitializedError("Engine pool is not initialized")

        engine = self._idle.get()
        if engine is None:
            self._idle.put(None)  # wake the next waiter as well
            raise EngineNotInitializedError("Engine pool is closed")
        try:
            yield engine
        finally:
            self._idle.put(engine)

    def run(self, sequence: Sequence[float]) -> np.ndarray:
        """Run one sequence on the next free engine."""
        with self.lease() as engine:
            return engine.run(sequence)

    def close(self) -> None:
        """
        Close every instance.

        Waits for in-flight calls to hand their engine back before closing it.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            engines = list(self._engines)

        for _ in engines:
            engine = self._idle.get()
            if engine is not None:
                engine.close()
        self._idle.put(None)
        logger.info("Engine pool closed", size=len(engines))

    def __enter__(self) -> "EnginePool":
        self.load()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
