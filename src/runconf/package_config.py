# runconf/package_config.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .exceptions import AmbiguousConfigSetError, ConfigSetNotFoundError, EmptyConfigSetError
from .runtime import Runtime
from .types import RuntimeKind

logger = logging.getLogger(__name__)


@dataclass
class PackageRuntimeConfig:
    """
    One package's parsed meta/run.yaml.

    All configuration sets share the same runtime kind (the Runtime subclass)
    but each is populated with its own field values.
    """

    runtime_kind: RuntimeKind

    config_sets: dict[str, Runtime] = field(default_factory=dict)
    """Configuration set name → populated runtime, in manifest order."""

    config_set_default: str = ""
    """Configuration set to use when none is named explicitly."""

    def __post_init__(self) -> None:
        if not self.config_sets:
            raise EmptyConfigSetError()

    @property
    def names(self) -> list[str]:
        return list(self.config_sets)

    def dependencies(self) -> list[str]:
        """Packages required by the runtime kind of this manifest."""
        return next(iter(self.config_sets.values())).dependencies()

    def select_config_set(self, name: str | None = None) -> tuple[str, Runtime]:
        """
        Pick the configuration set to run.

        Resolution order: explicit name → config_set_default → the only set.

        Returns:
            (name, runtime) of the selected configuration set

        Raises:
            ConfigSetNotFoundError: If the name (or default) is not declared
            AmbiguousConfigSetError: If nothing is named and there are several sets
        """
        name = name or self.config_set_default
        if not name:
            if len(self.config_sets) == 1:
                return next(iter(self.config_sets.items()))
            raise AmbiguousConfigSetError(self.names)

        runtime = self.config_sets.get(name)
        if runtime is None:
            raise ConfigSetNotFoundError(name, self.names)

        logger.debug(f"Selected configuration set '{name}'")
        return name, runtime
