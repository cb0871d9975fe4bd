# runconf/node_runtime.py
from __future__ import annotations

from dataclasses import dataclass, field

from .exceptions import MissingFieldError
from .runtime import Runtime
from .types import RuntimeKind


@dataclass
class NodeRuntime(Runtime):
    kind = RuntimeKind.NODE
    description = "Run JavaScript NodeJS 4.4.5 application"
    required_packages = ("node-4.4.5",)
    variant_yaml_template = """
# REQUIRED
# Filepath of the NodeJS entrypoint (where server is defined).
# Note that package root will correspond to filesystem root (/) in OSv image.
# Example value: /server.js
main: <filepath>

# OPTIONAL
# A list of Node.js args.
# Example value: node_args:
#                   - --require module1
node_args:
   - <list>

# OPTIONAL
# A list of command line args used by the application.
# Example value: args:
#                   - argument1
#                   - argument2
args:
   - <list>
"""

    main: str = ""
    node_args: list[str] = field(default_factory=list)
    args: list[str] = field(default_factory=list)

    def validate(self) -> None:
        if not self.inherits and not self.main:
            raise MissingFieldError("main")
        super().validate()

    def boot_command(self) -> str:
        return " ".join(["node", *self.node_args, self.main, *self.args])
