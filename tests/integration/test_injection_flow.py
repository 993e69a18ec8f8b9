"""Integration tests for a wired-up injector."""

import threading
from typing import Optional

import pytest

from jest_injector import (
    CycleError,
    Injector,
    InvalidBindingError,
    NotFoundError,
    build_injector,
    get_injector,
    reset_injector,
)
from jest_injector.infrastructure.config import Config, ResolutionConfig

import sample_services
from sample_services import (
    Cache,
    Chicken,
    Egg,
    Mailer,
    Report,
    ReportBuilder,
    Request,
    Session,
    SqlRepository,
)


class ReportService:
    """Application service built from a mix of shared and fresh bindings."""

    def __init__(self, session: Session, mailer: Mailer, cache: Optional[Cache] = None):
        self.session = session
        self.mailer = mailer
        self.cache = cache

    def run(self, builder: ReportBuilder) -> Report:
        return builder.build(self.session)


@pytest.fixture
def app():
    """An injector configured the way an application would."""
    injector = build_injector(
        Config(resolution=ResolutionConfig(trace_resolutions=False)),
        configure_observability=False,
    )
    injector[Request] = injector.share(Request)
    injector[Session] = injector.share(Session)
    injector[Mailer] = Mailer
    injector[ReportBuilder] = ReportBuilder()
    injector["repository"] = injector.share(SqlRepository)
    yield injector
    injector.clear()


@pytest.mark.integration
class TestInjectionFlow:
    """End-to-end resolution scenarios."""

    def test_full_graph(self, app):
        """Test building a service whose dependencies have dependencies."""
        service = app.create(ReportService)

        assert service.session is app[Session]
        assert service.session.request is app[Request]
        assert service.mailer.session is service.session
        assert service.cache is None

    def test_invoke_method_pair_on_created_service(self, app):
        service = app.create(ReportService)
        report = app.invoke((service, "run"))

        assert isinstance(report, Report)
        assert report.session is app[Session]

    def test_fresh_and_shared_bindings(self, app):
        assert app[Mailer] is not app[Mailer]
        assert app[Mailer].session is app[Mailer].session
        assert app["repository"] is app["repository"]

    def test_rebinding_replaces_behaviour(self, app):
        cache = Cache()
        app[Cache] = cache

        assert app.create(ReportService).cache is cache
        del app[Cache]
        assert app.create(ReportService).cache is None

    def test_none_binding_rejected(self, app):
        with pytest.raises(InvalidBindingError):
            app[Cache] = None
        assert Cache not in app

    def test_cycle_does_not_poison_injector(self, app):
        app[Chicken] = Chicken
        app[Egg] = Egg

        with pytest.raises(CycleError):
            app.create(Chicken)

        assert app.resolving == ()
        assert isinstance(app.invoke(sample_services.build_report), Report)

    def test_copy_constructor(self, app):
        """Test a copied injector starts with the same bindings but evolves alone."""
        copy = Injector(app)
        copy["extra"] = 1
        del copy[Mailer]

        assert "extra" not in app
        assert Mailer in app
        assert copy[Session] is app[Session]
        assert set(copy) == set(app) - {"sample_services.Mailer"} | {"extra"}

    def test_copy_requires_injector(self):
        with pytest.raises(TypeError):
            Injector({"a": 1})

    def test_subscript_sugar(self, app):
        app["greeting"] = "hello"

        assert "greeting" in app
        assert app["greeting"] == "hello"
        assert len(app) == 6
        assert "greeting" in list(app)
        assert repr(app) == "Injector(bindings=6)"

        del app["greeting"]
        with pytest.raises(NotFoundError):
            app["greeting"]

    def test_concurrent_shared_resolution(self):
        """Test threads resolving a shared binding see one instance."""
        injector = build_injector(
            Config(resolution=ResolutionConfig(thread_safe=True, trace_resolutions=False)),
            configure_observability=False,
        )
        injector[Request] = injector.share(Request)
        injector[Session] = injector.share(Session)
        barrier = threading.Barrier(6)
        results = []

        def worker():
            barrier.wait()
            results.append(injector[Session])

        threads = [threading.Thread(target=worker) for _ in range(6)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(results) == 6
        assert all(result is results[0] for result in results)


@pytest.mark.integration
class TestDefaultInjector:
    """Tests for the process-default injector."""

    def test_get_injector_is_cached(self):
        reset_injector()
        try:
            assert get_injector() is get_injector()
        finally:
            reset_injector()

    def test_reset_drops_bindings(self):
        reset_injector()
        try:
            first = get_injector()
            first["answer"] = 42
            reset_injector()

            assert "answer" not in first
            assert get_injector() is not first
        finally:
            reset_injector()
