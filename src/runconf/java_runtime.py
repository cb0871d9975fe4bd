# runconf/java_runtime.py
"""
JavaRuntime - runs a Java application on the JVM shipped as a base package.

The launcher command is fixed and reads everything from environment
variables ($CLASSPATH, $JVM_ARGS, ...), because the run-time command
interpreter expands them when the image boots. The manifest fields are
turned into those variables by `default_env()`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .exceptions import MissingFieldError
from .runtime import Runtime
from .types import RuntimeKind

logger = logging.getLogger(__name__)

JAVA_LAUNCHER = "java.so -Xms$XMS -Xmx$XMX -cp $CLASSPATH $JVM_ARGS $MAIN $ARGS"
DEFAULT_HEAP_SIZE = "512m"

# The run-time interpreter cannot pass an empty variable as a parameter,
# so a harmless system property stands in for "no JVM args".
EMPTY_JVM_ARGS = "-Dx=y"


@dataclass
class JavaRuntime(Runtime):
    kind = RuntimeKind.JAVA
    description = "Run Java application"
    required_packages = ("openjdk8-zulu-compact1",)
    variant_yaml_template = """
# REQUIRED
# Fully classified name of the main class.
# Example value: main.Hello
main: <name>

# REQUIRED
# A list of paths where classes and other resources can be found.
# Example value: classpath:
#                   - /
#                   - /package1
classpath:
   - <list>

# OPTIONAL
# Initial and maximum JVM memory size.
# Example value: xms: 512m
xms: <value>
xmx: <value>

# OPTIONAL
# A list of JVM args.
# Example value: jvm_args:
#                   - -Djava.net.preferIPv4Stack=true
#                   - -Dhadoop.log.dir=/hdfs/logs
jvm_args:
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
    """Fully qualified name of the main class."""

    classpath: list[str] = field(default_factory=list)
    xms: str = ""
    xmx: str = ""
    jvm_args: list[str] = field(default_factory=list)
    args: list[str] = field(default_factory=list)

    def validate(self) -> None:
        if not self.inherits:
            if not self.main:
                raise MissingFieldError("main")
            if not self.classpath:
                raise MissingFieldError("classpath")
        for name, values in (("jvm_args", self.jvm_args), ("args", self.args)):
            joined = " ".join(values)
            if " " in joined:
                logger.warning(f"Java {name} value '{joined}' contains spaces and will not survive as one boot token")
        super().validate()

    def boot_command(self) -> str:
        return JAVA_LAUNCHER

    def default_env(self) -> dict[str, str]:
        env = {
            "XMS": self.xms,
            "XMX": self.xmx,
            "CLASSPATH": ":".join(self.classpath),
            "JVM_ARGS": " ".join(self.jvm_args),
            "MAIN": self.main,
            "ARGS": " ".join(self.args),
        }
        if not self.inherits:
            # This set runs JAVA_LAUNCHER itself, so its placeholders need values
            env["XMS"] = env["XMS"] or DEFAULT_HEAP_SIZE
            env["XMX"] = env["XMX"] or DEFAULT_HEAP_SIZE
            env["JVM_ARGS"] = env["JVM_ARGS"] or EMPTY_JVM_ARGS
        return env
