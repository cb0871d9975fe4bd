__version__ = "0.3.0"

from .config_registry import ConfigRegistry
from .exceptions import (
    AmbiguousConfigSetError,
    ConfigSetNotFoundError,
    ConfigValidationError,
    CyclicReferenceError,
    EmptyConfigSetError,
    InvalidBaseFormatError,
    InvalidEnvEntryError,
    ManifestParseError,
    MissingFieldError,
    RunconfError,
    UnresolvedReferenceError,
    UnsupportedRuntimeError,
)
from .java_runtime import JavaRuntime
from .load_config import build_registry, load_config
from .load_manifest import load_manifest, load_package_runtime, parse_manifest
from .logging_config import disable_logging, get_log_file_path, setup_logging
from .native_runtime import NativeRuntime
from .node_runtime import NodeRuntime
from .package_config import PackageRuntimeConfig
from .project_config import PackageSource, ProjectConfig
from .python_runtime import PythonRuntime
from .run_config import NatRule, RunConfig, boot_cmd_for_script, parse_memory_size
from .runtime import Runtime
from .runtime_registry import (
    RUNTIMES,
    SUPPORTED_RUNTIMES,
    list_runtimes,
    pick_runtime,
    render_manifest_template,
)
from .types import BootCommand, ResolvedConfigSet, RuntimeKind

__all__ = [
    # Version
    "__version__",
    # Core Components
    "BootCommand",
    "ConfigRegistry",
    "PackageRuntimeConfig",
    "ResolvedConfigSet",
    "Runtime",
    "RuntimeKind",
    # Runtimes
    "JavaRuntime",
    "NativeRuntime",
    "NodeRuntime",
    "PythonRuntime",
    "RUNTIMES",
    "SUPPORTED_RUNTIMES",
    "list_runtimes",
    "pick_runtime",
    "render_manifest_template",
    # Loading
    "build_registry",
    "load_config",
    "load_manifest",
    "load_package_runtime",
    "parse_manifest",
    "PackageSource",
    "ProjectConfig",
    # Launch
    "NatRule",
    "RunConfig",
    "boot_cmd_for_script",
    "parse_memory_size",
    # Logging
    "disable_logging",
    "get_log_file_path",
    "setup_logging",
    # Exceptions
    "AmbiguousConfigSetError",
    "ConfigSetNotFoundError",
    "ConfigValidationError",
    "CyclicReferenceError",
    "EmptyConfigSetError",
    "InvalidBaseFormatError",
    "InvalidEnvEntryError",
    "ManifestParseError",
    "MissingFieldError",
    "RunconfError",
    "UnresolvedReferenceError",
    "UnsupportedRuntimeError",
]
