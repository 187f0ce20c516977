"""Tests for the process-wide backend selector."""

from __future__ import annotations

import threading

import factory
from backends import BackendKind, NativeBackend
from selector import BackendSelector, default_backend, get_backend, set_backend
from settings import EngineSettings


class TestSetGet:
    def test_starts_unset(self, selector):
        assert not selector.is_set

    def test_lazy_default_resolution(self, selector):
        be = selector.get()
        assert be.kind is BackendKind.NATIVE
        assert selector.is_set

    def test_resolution_is_cached(self, selector):
        assert selector.get() is selector.get()

    def test_explicit_set_wins(self, selector):
        mine = NativeBackend()
        selector.set(mine)
        assert selector.get() is mine

    def test_replace(self, selector):
        first, second = NativeBackend(), NativeBackend()
        selector.set(first)
        selector.set(second)
        assert selector.get() is second

    def test_clear_resolves_again(self, selector):
        first = selector.get()
        selector.set(None)
        assert not selector.is_set
        assert selector.get() is not first

    def test_configure_changes_next_resolution(self, selector, monkeypatch):
        calls = []
        original = factory.BackendFactory.create

        def spy(self, kind=None):
            calls.append(self.settings)
            return original(self, kind)

        monkeypatch.setattr(factory.BackendFactory, "create", spy)
        new = EngineSettings(backend="native", verify=False)
        selector.configure(new)
        selector.get()
        assert calls == [new]

    def test_environment_used_without_settings(self, monkeypatch):
        monkeypatch.setenv("BIGINT_BACKEND", "native")
        monkeypatch.setenv("BIGINT_VERIFY_SAMPLES", "5")
        assert BackendSelector().get().kind is BackendKind.NATIVE


class TestConcurrentResolution:
    def test_threads_share_one_backend(self, monkeypatch):
        built = []
        original = factory.BackendFactory.create

        def counting_create(self, kind=None):
            be = original(self, kind)
            built.append(be)
            return be

        monkeypatch.setattr(factory.BackendFactory, "create", counting_create)
        sel = BackendSelector(EngineSettings(backend="native", verify_samples=5))

        results = []
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            results.append(sel.get())

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(built) == 1
        assert all(r is built[0] for r in results)


class TestModuleLevel:
    def test_set_and_get_backend(self, reset_default_selector):
        mine = NativeBackend()
        set_backend(mine)
        assert get_backend() is mine

    def test_default_backend_is_owned(self, reset_default_selector):
        active = NativeBackend()
        set_backend(active)
        owned = default_backend(EngineSettings(backend="native", verify_samples=5))
        assert owned is not active
        assert owned.kind is BackendKind.NATIVE
        assert get_backend() is active

    def test_default_backend_each_call_is_fresh(self):
        settings = EngineSettings(backend="native", verify=False)
        assert default_backend(settings) is not default_backend(settings)
