# runconf/config_registry.py
"""
ConfigRegistry - run manifests of all packages that make up an image.

Packages are added in dependency order: a configuration set may only
inherit (`base: "<package>:<config_set>"`) from a package that is already
registered. `persist()` resolves every configuration set of every package
and writes the boot commands where the image build picks them up.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from .exceptions import RunconfError
from .package_config import PackageRuntimeConfig
from .run_config import RunConfig, boot_cmd_for_script
from .runtime import Runtime
from .types import ResolvedConfigSet

logger = logging.getLogger(__name__)

RUN_DIR = "run"


class ConfigRegistry:
    def __init__(self) -> None:
        # Insertion order is the dependency order supplied by the caller
        self._packages: dict[str, PackageRuntimeConfig | None] = {}

    # ------------------------------------------------------------------ #
    # Registration
    # ------------------------------------------------------------------ #
    def add(self, package: str, config: PackageRuntimeConfig | None) -> None:
        """
        Register a package's parsed manifest.

        Args:
            package: Package name, as referenced by `base`
            config: Parsed manifest, or None for a package without one

        Raises:
            ValueError: If the package is already registered
        """
        if package in self._packages:
            raise ValueError(f"Package '{package}' is already registered")
        self._packages[package] = config
        if config is None:
            logger.debug(f"Registered package '{package}' without run manifest")
        else:
            logger.debug(f"Registered package '{package}' with config sets {config.names}")

    def get(self, package: str) -> PackageRuntimeConfig | None:
        """Parsed manifest of a package, or None if unknown or it has none."""
        return self._packages.get(package)

    @property
    def packages(self) -> list[str]:
        return list(self._packages)

    def __contains__(self, package: object) -> bool:
        return package in self._packages

    def __iter__(self) -> Iterator[str]:
        return iter(self._packages)

    def __len__(self) -> int:
        return len(self._packages)

    def _require(self, package: str) -> PackageRuntimeConfig:
        config = self._packages.get(package)
        if config is None:
            known = ", ".join(p for p, c in self._packages.items() if c is not None)
            raise RunconfError(
                f"Package '{package}' has no run manifest. With manifest: {known or '(none)'}",
                package=package,
            )
        return config

    # ------------------------------------------------------------------ #
    # Resolution
    # ------------------------------------------------------------------ #
    def _resolve_runtime(self, package: str, name: str, runtime: Runtime) -> ResolvedConfigSet:
        try:
            runtime.validate()
            boot_cmd = runtime.build_boot_command(self, _seen=[f"{package}:{name}"])
        except RunconfError as e:
            raise e.add_context(package=package, config_set=name)

        logger.debug(f"Resolved '{package}:{name}' -> {boot_cmd}")
        return ResolvedConfigSet(
            package=package,
            name=name,
            runtime_kind=runtime.kind,
            boot_cmd=boot_cmd,
            dependencies=runtime.dependencies(),
            description=runtime.describe(),
        )

    def resolve(self, package: str, config_set: str | None = None) -> ResolvedConfigSet:
        """
        Validate and build the boot command of one configuration set.

        When `config_set` is omitted the package's default (or only) set is used.
        """
        config = self._require(package)
        try:
            name, runtime = config.select_config_set(config_set)
        except RunconfError as e:
            raise e.add_context(package=package)
        return self._resolve_runtime(package, name, runtime)

    def resolve_all(self) -> list[ResolvedConfigSet]:
        """
        Resolve every configuration set of every package, in registration order.

        Fails on the first invalid set; nothing is returned for a failed pass.
        """
        resolved = []
        for package, config in self._packages.items():
            if config is None:
                continue
            for name, runtime in config.config_sets.items():
                resolved.append(self._resolve_runtime(package, name, runtime))
        logger.info(f"Resolved {len(resolved)} config set(s) across {len(self)} package(s)")
        return resolved

    def persist(self, mpm_dir: str | Path) -> list[ResolvedConfigSet]:
        """
        Write the boot command of every configuration set to <mpm_dir>/run/<name>.

        Everything is resolved before the first file is written, so a failing
        pass leaves no new artifacts behind. Configuration sets that share a
        name across packages share a file; the later package wins.
        """
        resolved = self.resolve_all()

        target_dir = Path(mpm_dir) / RUN_DIR
        target_dir.mkdir(parents=True, exist_ok=True)

        for item in resolved:
            cmd_file = target_dir / item.name
            cmd_file.write_text(item.boot_cmd)
            logger.debug(f"Persisted boot command for '{item.package}:{item.name}' to {cmd_file}")

        return resolved

    # ------------------------------------------------------------------ #
    # Launcher hand-off
    # ------------------------------------------------------------------ #
    def run_config(
        self, package: str, config_set: str | None = None, **launch: Any
    ) -> RunConfig:
        """
        Build launch parameters that boot the selected configuration set.

        The boot command itself is not embedded; the image runs the artifact
        persisted for the set (see persist()).
        """
        config = self._require(package)
        try:
            name, _ = config.select_config_set(config_set)
        except RunconfError as e:
            raise e.add_context(package=package)
        return RunConfig(cmd=boot_cmd_for_script(name), **launch)
