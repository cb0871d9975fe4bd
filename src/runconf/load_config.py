from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO

try:
    import tomllib as tomli  # Python 3.11+
except ImportError:
    import tomli  # <3.11

from .config_registry import ConfigRegistry
from .exceptions import ConfigValidationError, RunconfError
from .load_manifest import load_manifest
from .project_config import PackageSource, ProjectConfig
from .run_config import NatRule, RunConfig

logger = logging.getLogger(__name__)


def _resolve_path(value: str | None, base_dir: Path) -> str | None:
    if value is None:
        return None
    path = Path(value)
    if not path.is_absolute():
        path = base_dir / path
    return str(path)


# =====================================================================
#   Main loader
# =====================================================================
def load_config(path: str | Path | BinaryIO) -> ProjectConfig:
    """
    Load and validate a TOML project file into a ProjectConfig.
    Resolves relative package paths and `mpm_dir` relative to the file location.
    """
    config_path: Path | None = None
    try:
        if not hasattr(path, "read"):
            config_path = Path(path).resolve()
            with open(config_path, "rb") as f:
                data = tomli.load(f)
        else:
            data = tomli.load(path)  # type: ignore
    except tomli.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML: {e}") from None

    # Resolve base directory for relative paths
    base_dir = config_path.parent if config_path else Path.cwd()

    # ────── Parse [[package]] entries ──────
    package_data = data.get("package", [])
    if not isinstance(package_data, list):
        raise ConfigValidationError("[[package]] must be an array of tables")

    packages = []
    for pkg_dict in package_data:
        pkg_dict = dict(pkg_dict)
        for key in ("path", "manifest"):
            if key in pkg_dict:
                pkg_dict[key] = _resolve_path(pkg_dict[key], base_dir)
        try:
            packages.append(PackageSource(**pkg_dict))
        except TypeError as e:
            raise ConfigValidationError(f"Invalid config in [[package]]: {e}") from None
    logger.debug(f"Loaded {len(packages)} package(s): {[p.name for p in packages]}")

    # ────── Parse [run] section ──────
    run_dict = dict(data.get("run", {}))
    run_package = run_dict.pop("package", None)
    run_config_set = run_dict.pop("config_set", None)
    if "cmd" in run_dict:
        raise ConfigValidationError(
            "[run] cmd is derived from the selected config set and cannot be set"
        )
    run_dict["nat_rules"] = [NatRule.parse(r) for r in run_dict.get("nat_rules", [])]
    try:
        run = RunConfig(**run_dict)
    except TypeError as e:
        raise ConfigValidationError(f"Invalid config in [run]: {e}") from None

    mpm_dir = _resolve_path(data.get("mpm_dir", ".runconf"), base_dir)

    return ProjectConfig(
        packages=packages,
        mpm_dir=mpm_dir,
        run=run,
        run_package=run_package,
        run_config_set=run_config_set,
    )


def build_registry(config: ProjectConfig) -> ConfigRegistry:
    """Load every package's manifest, in order, into a ConfigRegistry."""
    registry = ConfigRegistry()
    for source in config.packages:
        manifest_path = source.manifest_path
        try:
            manifest = load_manifest(manifest_path) if manifest_path is not None else None
        except RunconfError as e:
            raise e.add_context(package=source.name)
        registry.add(source.name, manifest)
    return registry
