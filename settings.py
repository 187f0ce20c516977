"""Engine settings.

Settings decide which backend the selector resolves to and how hard the
factory checks it before handing it out.  They are plain pydantic
models; ``from_env`` reads the ``BIGINT_*`` environment variables.
"""

from __future__ import annotations

import os
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

from backends import BackendKind

ENV_PREFIX = "BIGINT_"


class EngineSettings(BaseModel):
    """Backend choice and verification knobs."""

    model_config = ConfigDict(frozen=True)

    backend: BackendKind | None = Field(
        default=None,
        description="Force a backend; None auto-detects the most capable one",
    )
    verify: bool = Field(
        default=True,
        description="Check built backends against the primitive contract",
    )
    verify_samples: int = Field(
        default=200,
        ge=1,
        le=100_000,
        description="Random input samples per contract property",
    )
    verify_seed: int = Field(default=0, description="Seed for the sample generator")

    @field_validator("backend", mode="before")
    @classmethod
    def backend_name_is_case_insensitive(cls, v: object) -> object:
        if isinstance(v, str):
            v = v.strip().lower()
            return v or None
        return v

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "EngineSettings":
        """Build settings from ``BIGINT_*`` variables; unset ones keep defaults."""
        if environ is None:
            environ = os.environ
        values: dict[str, str] = {}
        for name in cls.model_fields:
            key = ENV_PREFIX + name.upper()
            if key in environ:
                values[name] = environ[key]
        return cls.model_validate(values)
