from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

import yaml

from .exceptions import ManifestParseError
from .package_config import PackageRuntimeConfig
from .runtime import Runtime
from .runtime_registry import RUNTIMES, parse_runtime_kind, pick_runtime

logger = logging.getLogger(__name__)

MANIFEST_PATH = Path("meta") / "run.yaml"


# =====================================================================
#   Decoding
# =====================================================================
def _decode(data: str | bytes) -> dict:
    """Decode YAML text and check the outer shape of a run manifest."""
    try:
        doc = yaml.safe_load(data)
    except yaml.YAMLError as e:
        raise ManifestParseError(f"failed to parse meta/run.yaml: {e}") from None

    if doc is None:
        doc = {}
    if not isinstance(doc, Mapping):
        raise ManifestParseError(
            f"failed to parse meta/run.yaml: expected a mapping, got {type(doc).__name__}"
        )

    if not isinstance(doc.get("runtime"), str):
        raise ManifestParseError("failed to parse meta/run.yaml: 'runtime' must be a string")

    default = doc.get("config_set_default")
    if default is not None and not isinstance(default, str):
        raise ManifestParseError(
            "failed to parse meta/run.yaml: 'config_set_default' must be a string"
        )

    config_set = doc.get("config_set") or {}
    if not isinstance(config_set, Mapping):
        raise ManifestParseError("failed to parse meta/run.yaml: 'config_set' must be a mapping")

    return doc


def parse_manifest(data: str | bytes) -> PackageRuntimeConfig:
    """
    Parse meta/run.yaml content into a PackageRuntimeConfig.

    Every configuration set gets a blank runtime of the declared kind which
    is then populated from that set's own sub-document.

    Raises:
        ManifestParseError: Malformed YAML, wrong outer shape or bad set fields
        UnsupportedRuntimeError: Unknown runtime kind
        EmptyConfigSetError: No configuration sets declared
    """
    doc = _decode(data)
    kind = parse_runtime_kind(doc["runtime"])
    runtime_cls = RUNTIMES[kind]

    config_sets: dict[str, Runtime] = {}
    for name, subdoc in (doc.get("config_set") or {}).items():
        name = str(name)
        if subdoc is None:
            subdoc = {}
        if not isinstance(subdoc, Mapping):
            raise ManifestParseError(
                f"failed to parse data for configset '{name}': expected a mapping",
                config_set=name,
            )
        try:
            config_sets[name] = runtime_cls.from_manifest(subdoc)
        except TypeError as e:
            raise ManifestParseError(
                f"failed to parse data for configset '{name}': {e}", config_set=name
            ) from None

    config = PackageRuntimeConfig(
        runtime_kind=kind,
        config_sets=config_sets,
        config_set_default=doc.get("config_set_default") or "",
    )
    logger.debug(
        f"Parsed {kind.value} manifest with {len(config_sets)} config set(s): {config.names}"
    )
    return config


# =====================================================================
#   Files
# =====================================================================
def _manifest_file(path: str | Path) -> Path:
    path = Path(path)
    if path.is_dir():
        return path / MANIFEST_PATH
    return path


def load_manifest(path: str | Path) -> PackageRuntimeConfig | None:
    """
    Load a package's run manifest.

    `path` may be the manifest itself or a package directory, in which case
    meta/run.yaml inside it is used. Returns None if the manifest does not
    exist, since packages are not required to have one.
    """
    manifest = _manifest_file(path)
    if not manifest.is_file():
        logger.debug(f"No run manifest at {manifest}")
        return None
    return parse_manifest(manifest.read_bytes())


def load_package_runtime(path: str | Path) -> Runtime | None:
    """
    Return a blank runtime for the kind a package's manifest declares.

    Only the outer shape is read, so this is enough to learn which packages
    a package depends on without populating any configuration set.
    """
    manifest = _manifest_file(path)
    if not manifest.is_file():
        return None

    doc = _decode(manifest.read_bytes())
    runtime = pick_runtime(doc["runtime"])
    logger.info(f"Resolved runtime into: {runtime.kind.value}")
    return runtime
