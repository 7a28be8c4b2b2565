"""
Unit tests for EnginePool.
"""

import threading
import time

import pytest

from intent_classifier.engine.pool import EnginePool
from intent_classifier.exceptions import (
    EngineInvocationError,
    EngineNotInitializedError,
    ResourceNotFoundError,
)


@pytest.fixture
def make_pool(stub_engine_cls, model_artifact):
    created = []

    def factory(size=1, **engine_kwargs):
        def build():
            engine = stub_engine_cls(model_artifact, **engine_kwargs)
            created.append(engine)
            return engine

        return EnginePool(build, size=size), created

    return factory


def test_load_creates_size_engines(make_pool):
    pool, engines = make_pool(size=3)
    pool.load()

    assert len(engines) == 3
    assert all(engine.is_loaded for engine in engines)
    assert pool.is_loaded
    assert pool.backend_name == "stub"
    assert (pool.input_size, pool.output_size) == (50, 3)


def test_load_is_idempotent(make_pool):
    pool, engines = make_pool(size=2)
    pool.load()
    pool.load()
    assert len(engines) == 2


def test_unloaded_pool_properties(make_pool):
    pool, _ = make_pool()

    assert not pool.is_loaded
    assert pool.backend_name is None
    assert pool.input_size is None
    assert pool.output_size is None


def test_invalid_size(make_pool):
    with pytest.raises(ValueError):
        make_pool(size=0)


def test_run_uses_an_engine(make_pool):
    pool, engines = make_pool()
    pool.load()

    scores = pool.run([0] * 50)

    assert scores.tolist() == pytest.approx([0.9, 0.05, 0.05])
    assert len(engines[0].calls) == 1


def test_run_before_load(make_pool):
    pool, _ = make_pool()

    with pytest.raises(EngineNotInitializedError):
        pool.run([0] * 50)


def test_run_after_close(make_pool):
    pool, engines = make_pool(size=2)
    pool.load()
    pool.close()

    assert not pool.is_loaded
    assert all(engine.released for engine in engines)
    with pytest.raises(EngineNotInitializedError):
        pool.run([0] * 50)


def test_close_is_idempotent(make_pool):
    pool, _ = make_pool()
    pool.load()
    pool.close()
    pool.close()


def test_engine_returned_after_failure(make_pool):
    pool, engines = make_pool(error=RuntimeError("boom"))
    pool.load()

    for _ in range(3):
        with pytest.raises(EngineInvocationError):
            pool.run([0] * 50)

    # The single engine was handed back every time
    assert len(engines[0].calls) == 3


def test_partial_load_failure_closes_loaded_engines(stub_engine_cls, model_artifact, tmp_path):
    paths = [model_artifact, tmp_path / "missing.tflite"]
    engines = []

    def build():
        engine = stub_engine_cls(paths[len(engines)])
        engines.append(engine)
        return engine

    pool = EnginePool(build, size=2)

    with pytest.raises(ResourceNotFoundError):
        pool.load()

    assert engines[0].released
    assert not pool.is_loaded


def test_lease_is_exclusive(make_pool):
    """With one engine, a second caller waits until the first lease ends."""
    pool, engines = make_pool()
    pool.load()
    order = []

    def second_caller():
        with pool.lease():
            order.append("second")

    with pool.lease() as engine:
        assert engine is engines[0]
        thread = threading.Thread(target=second_caller)
        thread.start()
        time.sleep(0.05)
        order.append("first")

    thread.join(timeout=2)
    assert order == ["first", "second"]


def test_close_waits_for_in_flight_lease(make_pool):
    pool, engines = make_pool()
    pool.load()
    closed = threading.Event()

    def closer():
        pool.close()
        closed.set()

    with pool.lease():
        thread = threading.Thread(target=closer)
        thread.start()
        time.sleep(0.05)
        assert not closed.is_set()
        assert not engines[0].released

    thread.join(timeout=2)
    assert closed.is_set()
    assert engines[0].released


def test_context_manager(make_pool):
    pool, engines = make_pool()

    with pool:
        assert pool.is_loaded

    assert engines[0].released
