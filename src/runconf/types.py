# runconf/types.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class RuntimeKind(str, Enum):
    """Execution modes a configuration set can describe."""

    NATIVE = "native"
    NODE = "node"
    JAVA = "java"
    PYTHON = "python"

    @classmethod
    def _missing_(cls, value: object) -> RuntimeKind | None:
        # Manifests written against older tooling spell node as "nodejs"
        if isinstance(value, str) and value.strip().lower() == "nodejs":
            return cls.NODE
        return None


@dataclass
class BootCommand:
    """
    Boot command under construction.

    - hard → `--env=KEY=VALUE`, always overwrites at run time
    - soft → `--env=KEY?=VALUE`, only takes effect if KEY is not set yet
    - command → the variant command line executed inside the image
    """

    command: str
    hard: dict[str, str] = field(default_factory=dict)
    soft: dict[str, str] = field(default_factory=dict)

    def render(self) -> str:
        """Hard tokens first, then soft tokens, then the command."""
        tokens = [f"--env={k}={v}" for k, v in self.hard.items()]
        tokens += [f"--env={k}?={v}" for k, v in self.soft.items()]
        tokens.append(self.command)
        return " ".join(tokens)

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class ResolvedConfigSet:
    """
    Outcome of resolving one configuration set.

    Everything a launcher needs to boot the image for this set.
    """

    package: str
    """Package that declares the configuration set."""

    name: str
    """Configuration set name; also the name of the persisted artifact."""

    runtime_kind: RuntimeKind

    boot_cmd: str
    """Final boot command text (see BootCommand.render)."""

    dependencies: list[str] = field(default_factory=list)
    """Base-image packages the variant needs pulled in."""

    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "package": self.package,
            "name": self.name,
            "runtime": self.runtime_kind.value,
            "boot_cmd": self.boot_cmd,
            "dependencies": list(self.dependencies),
            "description": self.description,
        }
