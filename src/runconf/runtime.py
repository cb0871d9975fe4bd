# runconf/runtime.py
"""
Runtime - base class for every configuration set variant.

A runtime is one configuration set parsed from meta/run.yaml. Subclasses add
the fields their execution mode needs (e.g. `main` for Java) and implement
`boot_command()`; everything that is common to all modes lives here:

- the `env` and `base` manifest fields
- environment validation and overriding
- boot command assembly, including inheritance from another package's
  configuration set through `base: "<package>:<config_set>"`
"""

from __future__ import annotations

import copy
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING, Any, ClassVar

from .exceptions import (
    CyclicReferenceError,
    InvalidBaseFormatError,
    InvalidEnvEntryError,
    UnresolvedReferenceError,
)
from .types import BootCommand, RuntimeKind

if TYPE_CHECKING:
    from .config_registry import ConfigRegistry

logger = logging.getLogger(__name__)

COMMON_YAML_TEMPLATE = """
# OPTIONAL
# Environment variables.
# A map of environment variables to be set when unikernel is run.
# Example value:  env:
#                    PORT: 8000
#                    HOSTNAME: www.myserver.org
env:
   <key>: <value>

# OPTIONAL
# Configuration to contextualize.
base: "<package-name>:<config_set>"
"""


@dataclass
class Runtime(ABC):
    """
    Common fields and behaviour of all runtimes.

    Fields are set for each configuration set separately, nothing is shared.
    """

    kind: ClassVar[RuntimeKind]
    description: ClassVar[str]
    required_packages: ClassVar[tuple[str, ...]] = ()
    variant_yaml_template: ClassVar[str] = ""

    env: dict[str, str] = field(default_factory=dict)
    """Environment variables to set when the unikernel boots."""

    base: str = ""
    """Optional `<package>:<config_set>` reference to inherit the boot command from."""

    # ------------------------------------------------------------------ #
    # Variant hooks
    # ------------------------------------------------------------------ #
    @abstractmethod
    def boot_command(self) -> str:
        """Variant-specific command line, without any environment prefix."""

    def default_env(self) -> dict[str, str]:
        """
        Environment entries derived from variant fields.

        Only used for keys the configuration set does not declare in `env`
        itself, and only when the value is non-empty.
        """
        return {}

    # ------------------------------------------------------------------ #
    # Introspection
    # ------------------------------------------------------------------ #
    @property
    def inherits(self) -> bool:
        return self.base != ""

    def describe(self) -> str:
        return self.description

    def dependencies(self) -> list[str]:
        """Names of packages this runtime needs in the image."""
        return list(self.required_packages)

    def yaml_template(self) -> str:
        """Manifest help text for this runtime, one comment per line."""
        return self.variant_yaml_template + COMMON_YAML_TEMPLATE

    # ------------------------------------------------------------------ #
    # Environment
    # ------------------------------------------------------------------ #
    def list_env(self) -> dict[str, str]:
        return dict(self.env)

    def override_env(self, values: Mapping[str, str]) -> list[str]:
        """
        Update existing environment keys with the given values.

        Keys this runtime does not declare are ignored. Returns the keys that
        were updated.
        """
        updated = []
        for key, value in values.items():
            if key in self.env:
                self.env[key] = value
                updated.append(key)
        return updated

    def effective_env(self) -> dict[str, str]:
        """Own `env` overlaid on the non-empty variant defaults."""
        defaults = {k: v for k, v in self.default_env().items() if v and k not in self.env}
        return {**defaults, **self.env}

    # ------------------------------------------------------------------ #
    # Validation
    # ------------------------------------------------------------------ #
    def validate(self) -> None:
        """
        Validate the common fields.

        Subclasses check their own required fields first (skipping them when
        the set inherits) and then call super().validate().
        """
        for key, value in self.env.items():
            if " " in key or " " in value:
                logger.warning(f"Invalid env entry in {self.kind.value} runtime: '{key}':'{value}'")
                raise InvalidEnvEntryError(key, value)

        if self.inherits and ":" not in self.base:
            logger.warning(f"Invalid base reference: '{self.base}'")
            raise InvalidBaseFormatError(self.base)

    # ------------------------------------------------------------------ #
    # Boot command
    # ------------------------------------------------------------------ #
    def build_boot_command(
        self, registry: ConfigRegistry, *, _seen: list[str] | None = None
    ) -> str:
        """
        Produce the boot command text for this configuration set.

        Args:
            registry: All packages registered so far; consulted when `base` is set.
            _seen: Internal inheritance chain for cycle detection (do not use directly).
        """
        return self.resolve_boot_command(registry, _seen=_seen).render()

    def resolve_boot_command(
        self, registry: ConfigRegistry, *, _seen: list[str] | None = None
    ) -> BootCommand:
        if self.inherits:
            return self._inherit_boot_command(registry, _seen or [])
        return BootCommand(command=self.boot_command(), hard=self.effective_env())

    def _inherit_boot_command(self, registry: ConfigRegistry, seen: list[str]) -> BootCommand:
        """Build the boot command of the set referenced by `base`, with our env pushed in."""
        pkg_name, sep, set_name = self.base.partition(":")
        if not sep:
            raise InvalidBaseFormatError(self.base)

        if self.base in seen:
            logger.warning(f"Inheritance cycle detected at '{self.base}': {seen}")
            raise CyclicReferenceError(self.base, list(seen))

        package = registry.get(pkg_name)
        if package is None:
            raise UnresolvedReferenceError(
                self.base, f"package '{pkg_name}' not included or has no meta/run.yaml"
            )
        original = package.config_sets.get(set_name)
        if original is None:
            raise UnresolvedReferenceError(
                self.base, f"config_set '{set_name}' does not exist in package '{pkg_name}'"
            )

        # Work on a clone so the referenced set stays as parsed from its manifest
        own_env = self.effective_env()
        inherited = original.copy()
        # Field-derived defaults become declared env so our values can replace them
        inherited.env = inherited.effective_env()
        updated = inherited.override_env(own_env)
        logger.debug(f"Inheriting from '{self.base}', overriding keys: {updated}")

        boot = inherited.resolve_boot_command(registry, _seen=[*seen, self.base])

        # Keys the base does not know about are left for run time to decide
        soft = {k: v for k, v in own_env.items() if k not in updated}
        boot.soft = {**soft, **{k: v for k, v in boot.soft.items() if k not in soft}}
        return boot

    # ------------------------------------------------------------------ #
    # Construction
    # ------------------------------------------------------------------ #
    def copy(self) -> Runtime:
        """Deep copy, safe to mutate without touching this instance."""
        return copy.deepcopy(self)

    @classmethod
    def from_manifest(cls, data: Mapping[str, Any]) -> Runtime:
        """
        Populate a runtime from one `config_set` entry of meta/run.yaml.

        Scalars are coerced to strings (YAML reads `PORT: 8000` as an int).

        Raises:
            TypeError: On unknown fields or values of the wrong shape
        """
        known = {f.name: f for f in fields(cls)}
        unknown = sorted(str(k) for k in data if k not in known)
        if unknown:
            raise TypeError(f"unexpected field(s): {', '.join(unknown)}")

        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            if value is None:
                continue
            factory = known[key].default_factory
            if factory is dict:
                kwargs[key] = _to_str_map(key, value)
            elif factory is list:
                kwargs[key] = _to_str_list(key, value)
            else:
                kwargs[key] = _to_str(key, value)
        return cls(**kwargs)


def _to_str(key: str, value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise TypeError(f"'{key}' must be a scalar, got {type(value).__name__}")


def _to_str_list(key: str, value: Any) -> list[str]:
    if not isinstance(value, list):
        raise TypeError(f"'{key}' must be a list, got {type(value).__name__}")
    return [_to_str(key, item) for item in value]


def _to_str_map(key: str, value: Any) -> dict[str, str]:
    if not isinstance(value, Mapping):
        raise TypeError(f"'{key}' must be a mapping, got {type(value).__name__}")
    return {_to_str(key, k): ("" if v is None else _to_str(f"{key}.{k}", v)) for k, v in value.items()}
