# runconf/project_config.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .exceptions import ConfigValidationError
from .run_config import RunConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PackageSource:
    """
    Where to find one package's run manifest.
    Used both when loading from TOML and when passed programmatically.
    """

    name: str
    """Package name, as referenced by `base: "<package>:<config_set>"`."""

    path: str | Path | None = None
    """Package directory; its manifest is meta/run.yaml inside it."""

    manifest: str | Path | None = None
    """Explicit manifest file (takes precedence over `path`)."""

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            logger.warning("Invalid config: Package name cannot be empty")
            raise ConfigValidationError("Package name cannot be empty")
        if ":" in self.name:
            logger.warning(f"Invalid config for '{self.name}': ':' in package name")
            raise ConfigValidationError(
                f"Package name '{self.name}' cannot contain ':' (used by base references)"
            )

    @property
    def manifest_path(self) -> Path | None:
        """Manifest file or package directory to load, or None if the package has neither."""
        if self.manifest is not None:
            return Path(self.manifest)
        if self.path is not None:
            return Path(self.path)
        return None


@dataclass(frozen=True)
class ProjectConfig:
    """
    Top-level configuration object returned by load_config().
    Contains everything needed to build a ConfigRegistry and launch the image.
    """

    packages: list[PackageSource]
    """Packages in dependency order (bases before the packages inheriting from them)."""

    mpm_dir: str = ".runconf"
    """Directory boot commands are persisted under (<mpm_dir>/run/<config_set>)."""

    run: RunConfig = field(default_factory=RunConfig)
    """Launch parameters; `cmd` is filled in once the config set is selected."""

    run_package: str | None = None
    """Package to launch. Default: the last package."""

    run_config_set: str | None = None
    """Configuration set to launch. Default: the package's default (or only) set."""

    def __post_init__(self) -> None:
        if not self.packages:
            raise ConfigValidationError("At least one [[package]] is required")

        names = [p.name for p in self.packages]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ConfigValidationError(f"Duplicate package names: {', '.join(duplicates)}")

        if self.run_package is not None and self.run_package not in names:
            raise ConfigValidationError(
                f"[run] package '{self.run_package}' is not one of the listed packages"
            )

    @property
    def target_package(self) -> str:
        return self.run_package or self.packages[-1].name
