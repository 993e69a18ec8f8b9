"""Unit tests for shared (memoized) factories."""

import threading

import pytest

from jest_injector import CycleError, Injector, SharedFactory
from jest_injector.infrastructure.config import Config, ResolutionConfig

from sample_services import Chicken, Egg, Request, Session


@pytest.mark.unit
class TestSharedFactory:
    """Test cases for SharedFactory on its own."""

    def test_invokes_once(self):
        """Test the wrapped factory runs on first call only."""
        calls = []

        def invoke(factory):
            calls.append(factory)
            return factory()

        shared = SharedFactory(Request, invoke)
        first = shared()
        second = shared()

        assert first is second
        assert calls == [Request]
        assert shared.is_resolved

    def test_caches_none(self):
        """Test a None result is memoized like any other value."""
        calls = []

        def invoke(factory):
            calls.append(1)
            return None

        shared = SharedFactory(object, invoke)
        assert shared() is None
        assert shared() is None
        assert calls == [1]

    def test_retries_after_failure(self):
        """Test a failing first call leaves the wrapper unresolved."""
        attempts = []

        def invoke(factory):
            attempts.append(1)
            if len(attempts) == 1:
                raise RuntimeError("first call fails")
            return "ready"

        shared = SharedFactory(object, invoke)
        with pytest.raises(RuntimeError):
            shared()
        assert not shared.is_resolved

        assert shared() == "ready"
        assert len(attempts) == 2

    def test_reset(self):
        shared = SharedFactory(Request, lambda factory: factory())
        first = shared()
        shared.reset()

        assert not shared.is_resolved
        assert shared() is not first

    def test_repr(self):
        shared = SharedFactory("factory", lambda factory: 1)
        assert "pending" in repr(shared)
        shared()
        assert "resolved" in repr(shared)

    def test_concurrent_first_calls(self):
        """Test racing threads still run the factory exactly once."""
        calls = []
        barrier = threading.Barrier(8)
        results = []

        def invoke(factory):
            calls.append(1)
            return factory()

        shared = SharedFactory(Request, invoke)

        def worker():
            barrier.wait()
            results.append(shared())

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(calls) == 1
        assert len(results) == 8
        assert all(result is results[0] for result in results)


@pytest.mark.unit
class TestShare:
    """Test cases for Injector.share."""

    def test_shared_binding_is_singleton(self, injector):
        injector[Request] = injector.share(Request)

        assert injector[Request] is injector[Request]

    def test_shared_factory_dependencies_injected(self, injector):
        """Test the wrapped factory receives its own dependencies."""
        injector[Request] = injector.share(Request)
        injector[Session] = injector.share(Session)

        session = injector[Session]

        assert session is injector[Session]
        assert session.request is injector[Request]

    def test_unshared_factory_over_shared_dependency(self, injector):
        injector[Request] = injector.share(Request)
        injector[Session] = Session

        first, second = injector[Session], injector[Session]

        assert first is not second
        assert first.request is second.request

    def test_wrappers_are_independent(self, injector):
        """Test sharing the same factory twice gives two singletons."""
        injector["first"] = injector.share(Request)
        injector["second"] = injector.share(Request)

        assert injector["first"] is injector["first"]
        assert injector["first"] is not injector["second"]

    def test_share_lambda(self, injector):
        request = Request()
        injector[Request] = request
        injector[Session] = injector.share(lambda: Session(injector[Request]))

        assert injector[Session].request is request

    def test_share_named_function(self, injector):
        injector["report_builder"] = injector.share("sample_services.build_report")
        injector[Session] = Session(Request())

        assert injector["report_builder"] is injector["report_builder"]

    def test_shared_cycle_detected(self, injector):
        """Test shared factories still take part in cycle detection."""
        injector[Chicken] = injector.share(Chicken)
        injector[Egg] = injector.share(Egg)

        with pytest.raises(CycleError):
            injector[Chicken]
        assert injector.resolving == ()

    def test_shared_retry_after_missing_dependency(self, injector):
        """Test a shared factory that failed resolves once its dependency exists."""
        shared = injector.share(Session)
        injector[Session] = shared

        with pytest.raises(KeyError):
            injector[Session]
        assert not shared.is_resolved

        injector[Request] = Request
        assert injector[Session] is injector[Session]
        assert shared.is_resolved

    def test_share_does_not_register(self, injector):
        injector.share(Request)
        assert len(injector) == 0

    def test_direct_call_waits_for_injector_lock(self):
        """Test a wrapper on a thread-safe injector runs under the injector lock."""
        injector = Injector(
            config=Config(resolution=ResolutionConfig(thread_safe=True, trace_resolutions=False))
        )
        shared = injector.share(Request)
        started = threading.Event()
        results = []

        def worker():
            started.set()
            results.append(shared())

        thread = threading.Thread(target=worker)
        with injector._lock:
            thread.start()
            started.wait()
            thread.join(timeout=0.2)
            assert thread.is_alive()
            assert not shared.is_resolved
        thread.join()

        assert isinstance(results[0], Request)
        assert shared.is_resolved

    def test_shared_binding_is_factory(self, injector):
        binding = injector.set(Request, injector.share(Request))
        assert binding.is_factory
