# runconf/runtime_registry.py
"""
Maps runtime kinds to their Runtime implementations.

The table is fixed per release; add a new execution mode by writing a
Runtime subclass and listing it here.
"""

from __future__ import annotations

import logging
from types import MappingProxyType

from .exceptions import UnsupportedRuntimeError
from .java_runtime import JavaRuntime
from .native_runtime import NativeRuntime
from .node_runtime import NodeRuntime
from .python_runtime import PythonRuntime
from .runtime import Runtime
from .types import RuntimeKind

logger = logging.getLogger(__name__)

RUNTIMES: MappingProxyType[RuntimeKind, type[Runtime]] = MappingProxyType(
    {
        RuntimeKind.NATIVE: NativeRuntime,
        RuntimeKind.NODE: NodeRuntime,
        RuntimeKind.JAVA: JavaRuntime,
        RuntimeKind.PYTHON: PythonRuntime,
    }
)

SUPPORTED_RUNTIMES: tuple[RuntimeKind, ...] = tuple(RUNTIMES)


def parse_runtime_kind(name: str | RuntimeKind) -> RuntimeKind:
    """Normalize a manifest `runtime` value, raising UnsupportedRuntimeError if unknown."""
    try:
        return RuntimeKind(name)
    except ValueError:
        raise UnsupportedRuntimeError(name) from None


def pick_runtime(kind: str | RuntimeKind) -> Runtime:
    """
    Return a blank runtime of the given kind.

    'Blank' means no fields are populated, but the instance is of the right
    type, which is enough to answer which packages it depends on.
    """
    runtime_cls = RUNTIMES.get(parse_runtime_kind(kind))
    if runtime_cls is None:
        raise UnsupportedRuntimeError(kind)
    return runtime_cls()


def list_runtimes() -> list[tuple[RuntimeKind, str]]:
    """Supported runtime kinds with their short descriptions."""
    return [(kind, cls.description) for kind, cls in RUNTIMES.items()]


def render_manifest_template(kind: str | RuntimeKind, *, plain: bool = False) -> str:
    """
    Render a meta/run.yaml skeleton for the given runtime kind.

    Args:
        kind: Runtime to render the template for
        plain: Drop all comment lines, leaving only the keys
    """
    runtime = pick_runtime(kind)
    body = "\n".join(
        f"    {line}" if line.strip() else "" for line in runtime.yaml_template().splitlines()
    )
    text = (
        "# REQUIRED\n"
        "# Runtime this package is run with.\n"
        f"runtime: {runtime.kind.value}\n"
        "\n"
        "# OPTIONAL\n"
        "# Configuration set to run when none is requested explicitly.\n"
        "config_set_default: default\n"
        "\n"
        "# REQUIRED\n"
        "# Named configuration sets.\n"
        "config_set:\n"
        "  default:"
        f"{body}\n"
    )
    if plain:
        lines = [line for line in text.splitlines() if not line.lstrip().startswith("#")]
        text = "\n".join(line for i, line in enumerate(lines) if line or (i and lines[i - 1]))
        text += "\n"
    logger.debug(f"Rendered manifest template for runtime '{runtime.kind.value}' (plain={plain})")
    return text
