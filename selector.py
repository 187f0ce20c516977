"""Process-wide active backend.

This is the only mutable state in the engine.  ``set`` and the lazy
resolution in ``get`` are serialized by a lock; once a backend is in
place, ``get`` returns it without locking.

Code that wants to avoid the global entirely takes its own backend from
``default_backend`` and passes it to ``Calculator``.
"""

from __future__ import annotations

import logging
import threading

from backends import PrimitiveBackend
from factory import BackendFactory, create_backend
from settings import EngineSettings

logger = logging.getLogger(__name__)


class BackendSelector:
    """Holds the active backend, resolving a default on first use."""

    def __init__(self, settings: EngineSettings | None = None) -> None:
        self._settings = settings
        self._backend: PrimitiveBackend | None = None
        self._lock = threading.Lock()

    def set(self, backend: PrimitiveBackend | None) -> None:
        """Install ``backend``, or clear the handle with ``None``."""
        with self._lock:
            self._backend = backend
        if backend is None:
            logger.info("active backend cleared, next get() auto-detects")
        else:
            logger.info("active backend set to %r", backend)

    def get(self) -> PrimitiveBackend:
        """Active backend; resolved on first use and cached until the next ``set``."""
        backend = self._backend
        if backend is not None:
            return backend
        with self._lock:
            if self._backend is None:
                self._backend = BackendFactory(self._resolve_settings()).create()
                logger.info("resolved default backend %r", self._backend)
            return self._backend

    def configure(self, settings: EngineSettings | None) -> None:
        """Replace the settings used by the next default resolution."""
        with self._lock:
            self._settings = settings

    @property
    def is_set(self) -> bool:
        return self._backend is not None

    def _resolve_settings(self) -> EngineSettings:
        if self._settings is not None:
            return self._settings
        return EngineSettings.from_env()


_default = BackendSelector()


def set_backend(backend: PrimitiveBackend | None) -> None:
    _default.set(backend)


def get_backend() -> PrimitiveBackend:
    return _default.get()


def default_selector() -> BackendSelector:
    return _default


def default_backend(settings: EngineSettings | None = None) -> PrimitiveBackend:
    """A freshly built backend owned by the caller; the active handle is untouched."""
    return create_backend(None, settings)
