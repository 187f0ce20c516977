"""The backend factory.

The factory does NOT just construct backends - it *verifies* them
against the primitive contract (``spec.backend_spec``) before releasing
them.

Flow:
  1. Caller requests a backend (a kind, or auto-detection).
  2. Factory builds the implementation.
  3. Factory runs the contract against it on edge-case and random inputs.
  4. If verification passes  -> return the backend.
     If verification fails   -> raise, never hand out a broken instance.

Auto-detection walks ``backends.PRIORITY`` and takes the first kind that
is installed and passes; NATIVE is last and always available.
"""

from __future__ import annotations

import itertools
import logging
import random
from dataclasses import dataclass, field

from backends import (
    PRIORITY,
    BackendKind,
    PrimitiveBackend,
    build_backend,
    is_available,
)
from errors import BackendUnavailableError, VerificationError
from settings import EngineSettings
from spec import ErrorCondition, Property, Spec, backend_spec

logger = logging.getLogger(__name__)

# What a misbehaving backend may raise while being checked.
_BACKEND_FAILURES = (ArithmeticError, ValueError, TypeError)


@dataclass
class VerificationResult:
    """Outcome of verifying one property or error condition."""

    property_name: str
    passed: bool
    counterexample: tuple | None = None
    tests_run: int = 0

    def __repr__(self) -> str:
        status = "PASS" if self.passed else "FAIL"
        ce = f"  counterexample={self.counterexample}" if self.counterexample else ""
        return f"[{status}] {self.property_name} ({self.tests_run} tests){ce}"


@dataclass
class VerificationReport:
    """Aggregate result of verifying one spec against one backend."""

    spec_name: str
    backend_kind: BackendKind | None = None
    results: list[VerificationResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(r.passed for r in self.results)

    @property
    def failures(self) -> list[VerificationResult]:
        return [r for r in self.results if not r.passed]

    def summary(self) -> str:
        kind = f" [{self.backend_kind.value}]" if self.backend_kind else ""
        lines = [f"--- {self.spec_name}{kind} ---"]
        for r in self.results:
            lines.append(f"  {r}")
        status = "ALL PASSED" if self.passed else "FAILED"
        lines.append(f"  => {status}")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# The factory
# ---------------------------------------------------------------------------

class BackendFactory:
    """Produces primitive backends that are checked against their contract."""

    def __init__(self, settings: EngineSettings | None = None) -> None:
        self.settings = settings if settings is not None else EngineSettings()

    def create(self, kind: BackendKind | None = None) -> PrimitiveBackend:
        """Build, verify and return a backend.

        ``kind`` overrides ``settings.backend``.  With neither set, the
        first available kind in priority order that passes verification
        is returned.
        """
        kind = kind if kind is not None else self.settings.backend
        if kind is not None:
            return self._create_kind(kind)
        return self._detect()

    def verify(self, backend: PrimitiveBackend) -> list[VerificationReport]:
        """Run the whole contract against ``backend``; never raises on failure."""
        rng = random.Random(self.settings.verify_seed)
        reports = []
        for spec in backend_spec():
            report = self._verify_spec(spec, backend, rng)
            logger.debug("verified %s: %s", spec.name, "ok" if report.passed else "FAILED")
            reports.append(report)
        return reports

    # -- internal ---------------------------------------------------------

    def _create_kind(self, kind: BackendKind) -> PrimitiveBackend:
        backend = build_backend(kind)
        if self.settings.verify:
            for report in self.verify(backend):
                if not report.passed:
                    raise VerificationError(report)
        logger.debug("built %s backend", kind.value)
        return backend

    def _detect(self) -> PrimitiveBackend:
        for kind in PRIORITY:
            if not is_available(kind):
                logger.debug("backend %s not installed, skipping", kind.value)
                continue
            try:
                return self._create_kind(kind)
            except VerificationError as exc:
                if kind is PRIORITY[-1]:
                    raise
                logger.warning(
                    "backend %s failed verification, falling back\n%s",
                    kind.value, exc.report.summary(),
                )
        raise BackendUnavailableError("no backend available")

    def _verify_spec(
        self, spec: Spec, backend: PrimitiveBackend, rng: random.Random
    ) -> VerificationReport:
        report = VerificationReport(spec_name=spec.name, backend_kind=backend.kind)
        for prop in spec:
            report.results.append(self._verify_property(prop, backend, rng))
        for condition in spec.error_conditions:
            report.results.append(self._verify_error(condition, backend))
        return report

    def _verify_property(
        self, prop: Property, backend: PrimitiveBackend, rng: random.Random
    ) -> VerificationResult:
        samples = generate_samples(prop.arity, self.settings.verify_samples, rng)
        tests_run = 0
        for combo in samples:
            tests_run += 1
            try:
                ok = prop.check(backend, *combo)
            except _BACKEND_FAILURES:
                ok = False
            if not ok:
                return VerificationResult(
                    property_name=prop.name,
                    passed=False,
                    counterexample=combo,
                    tests_run=tests_run,
                )
        return VerificationResult(
            property_name=prop.name, passed=True, tests_run=tests_run
        )

    def _verify_error(
        self, condition: ErrorCondition, backend: PrimitiveBackend
    ) -> VerificationResult:
        try:
            condition.invoke(backend)
        except condition.exception:
            return VerificationResult(condition.name, passed=True, tests_run=1)
        except _BACKEND_FAILURES:
            pass
        return VerificationResult(condition.name, passed=False, tests_run=1)


def create_backend(
    kind: BackendKind | None = None, settings: EngineSettings | None = None
) -> PrimitiveBackend:
    """Return a freshly built, verified backend owned by the caller."""
    return BackendFactory(settings).create(kind)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

EDGE_VALUES = (
    0, 1, -1, 2, -2, 3, -7, 9, 10, -10, 255, 256, -256,
    2**63 - 1, -(2**63), 10**30, -(10**30) + 7,
)


def generate_samples(arity: int, count: int, rng: random.Random) -> list[tuple[str, ...]]:
    """Edge-case combinations first, then random canonical strings."""
    edges = [str(v) for v in EDGE_VALUES]
    samples: list[tuple[str, ...]] = []

    for combo in itertools.product(edges, repeat=arity):
        if len(samples) >= count:
            return samples
        samples.append(combo)

    while len(samples) < count:
        samples.append(tuple(_random_canonical(rng) for _ in range(arity)))
    return samples


def _random_canonical(rng: random.Random) -> str:
    digits = rng.randint(1, 60)
    value = rng.randrange(10 ** (digits - 1), 10 ** digits)
    if digits == 1 and rng.random() < 0.2:
        value = 0
    return str(-value if rng.random() < 0.5 else value)
