"""Concrete item kinds and the item-creation request model.

Three kinds are shipped:

* ``FreestyleProject`` — an item that is itself a build-producing job.
* ``MultiConfigProject`` — an item whose jobs are itself plus one
  ``MatrixConfiguration`` per axis combination; all of them record builds.
* ``ExternalJob`` — an item that monitors something outside this system
  and records no build history here.  Traversals skip it.

All kinds are frozen.  The record store replaces an item with a
``model_copy`` when a build is recorded.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from jobview.models.hierarchy import Build

# Characters that may not appear in an item name (they break URLs or paths).
UNSAFE_NAME_CHARS = frozenset("?*/\\%!@#$^&|<>[]:;")


def check_good_name(name: str) -> str:
    """Validate an item or view name, returning it stripped.

    Raises ``ValueError`` with a human-readable reason on failure.
    """
    name = name.strip()
    if not name:
        raise ValueError("name must not be empty")
    if name in (".", ".."):
        raise ValueError(f"'{name}' is not an allowed name")
    for ch in name:
        if ch in UNSAFE_NAME_CHARS or not ch.isprintable():
            raise ValueError(f"'{ch}' is an unsafe character in '{name}'")
    return name


class _ProjectBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    builds: tuple[Build, ...] = ()  # newest first

    @property
    def url(self) -> str:
        return f"job/{self.name}/"

    def get_builds(self) -> Sequence[Build]:
        return self.builds

    @property
    def last_build(self) -> Build | None:
        return self.builds[0] if self.builds else None

    @property
    def next_build_number(self) -> int:
        return self.builds[0].number + 1 if self.builds else 1


class FreestyleProject(_ProjectBase):
    """A single build-producing job that is also a top-level item."""

    kind: Literal["freestyle"] = "freestyle"

    def get_all_jobs(self) -> Sequence[_ProjectBase]:
        return (self,)


class MatrixConfiguration(_ProjectBase):
    """One axis combination of a ``MultiConfigProject`` (e.g. ``jdk=17``)."""

    parent_name: str

    @property
    def url(self) -> str:
        return f"job/{self.parent_name}/{self.name}/"


class MultiConfigProject(_ProjectBase):
    kind: Literal["multi-config"] = "multi-config"
    configurations: tuple[MatrixConfiguration, ...] = ()

    def get_all_jobs(self) -> Sequence[_ProjectBase]:
        return (self, *self.configurations)

    def get_configuration(self, name: str) -> MatrixConfiguration | None:
        for config in self.configurations:
            if config.name == name:
                return config
        return None


class ExternalJob(BaseModel):
    """A job whose runs happen elsewhere; no build history is exposed."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["external"] = "external"
    name: str
    description: str = ""

    @property
    def url(self) -> str:
        return f"job/{self.name}/"

    def get_all_jobs(self) -> Sequence[ExternalJob]:
        return (self,)


AnyItem = Annotated[
    Union[FreestyleProject, MultiConfigProject, ExternalJob],
    Field(discriminator="kind"),
]


# ---------------------------------------------------------------------------
# Creation request
# ---------------------------------------------------------------------------


class CreateMode(str, Enum):
    FREESTYLE = "freestyle"
    MULTI_CONFIG = "multi-config"
    EXTERNAL = "external"
    COPY = "copy"


class CreateItemRequest(BaseModel):
    """Validated input for ``View.create_item``.

    Built from untrusted form-like data with ``model_validate``; malformed
    input surfaces as a pydantic ``ValidationError``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    mode: CreateMode = CreateMode.FREESTYLE
    copy_from: str | None = None
    description: str = ""
    configurations: tuple[str, ...] = ()  # multi-config only

    @field_validator("name")
    @classmethod
    def _good_name(cls, value: str) -> str:
        return check_good_name(value)

    @field_validator("configurations")
    @classmethod
    def _good_configuration_names(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(check_good_name(v) for v in value)

    @model_validator(mode="after")
    def _mode_consistency(self) -> CreateItemRequest:
        if self.mode == CreateMode.COPY and not self.copy_from:
            raise ValueError("copy mode requires 'copy_from'")
        if self.mode != CreateMode.COPY and self.copy_from:
            raise ValueError("'copy_from' is only valid in copy mode")
        if self.configurations and self.mode != CreateMode.MULTI_CONFIG:
            raise ValueError("'configurations' is only valid in multi-config mode")
        return self
