# runconf/python_runtime.py
from __future__ import annotations

from dataclasses import dataclass, field

from .exceptions import MissingFieldError
from .runtime import Runtime
from .types import RuntimeKind


@dataclass
class PythonRuntime(Runtime):
    kind = RuntimeKind.PYTHON
    description = "Run Python 2.7 application"
    required_packages = ("python-2.7",)
    variant_yaml_template = """
# REQUIRED
# Filepath of the Python script to run.
# Note that package root will correspond to filesystem root (/) in OSv image.
# Example value: /app/main.py
main: <filepath>

# OPTIONAL
# A list of interpreter args.
# Example value: python_args:
#                   - -u
python_args:
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
    python_args: list[str] = field(default_factory=list)
    args: list[str] = field(default_factory=list)

    def validate(self) -> None:
        if not self.inherits and not self.main:
            raise MissingFieldError("main")
        super().validate()

    def boot_command(self) -> str:
        return " ".join(["/python", *self.python_args, self.main, *self.args])
