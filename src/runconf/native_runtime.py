# runconf/native_runtime.py
from __future__ import annotations

from dataclasses import dataclass

from .exceptions import MissingFieldError
from .runtime import Runtime
from .types import RuntimeKind


@dataclass
class NativeRuntime(Runtime):
    """Runs an arbitrary command line inside the unikernel."""

    kind = RuntimeKind.NATIVE
    description = "Run arbitrary command inside OSv"
    variant_yaml_template = """
# REQUIRED
# Command to be executed in OSv.
# Note that package root will correspond to filesystem root (/) in OSv image.
# Example value: /usr/bin/simpleFoam.so -help
bootcmd: <command>
"""

    bootcmd: str = ""

    def validate(self) -> None:
        if not self.inherits and not self.bootcmd:
            raise MissingFieldError("bootcmd")
        super().validate()

    def boot_command(self) -> str:
        return self.bootcmd
