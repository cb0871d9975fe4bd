# runconf/run_config.py
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from .exceptions import ConfigValidationError

logger = logging.getLogger(__name__)

NETWORKING_MODES = ("nat", "bridge", "tap", "vhost")

_MEMORY_PATTERN = re.compile(r"^\s*(\d+)\s*([MmGg]?)[Bb]?\s*$")


def boot_cmd_for_script(name: str) -> str:
    """Command that makes the image run the boot command persisted for `name`."""
    if not name:
        return ""
    return f"runscript /run/{name}"


def parse_memory_size(size: str | int) -> int:
    """
    Convert a memory size into megabytes.

    Accepts plain megabytes (512, "512"), "512M"/"512MB" and "2G"/"2GB".
    """
    if isinstance(size, int):
        if size <= 0:
            raise ConfigValidationError(f"Memory size must be positive, got {size}")
        return size

    match = _MEMORY_PATTERN.match(size)
    if not match or int(match.group(1)) <= 0:
        raise ConfigValidationError(f"Invalid memory size: '{size}'")

    amount, unit = int(match.group(1)), match.group(2).upper()
    return amount * 1024 if unit == "G" else amount


@dataclass(frozen=True)
class NatRule:
    """Host port forwarded to a guest port when networking is 'nat'."""

    host_port: int
    guest_port: int

    @classmethod
    def parse(cls, rule: str) -> NatRule:
        """Parse 'HOST:GUEST', or a single port used on both sides."""
        host, _, guest = str(rule).partition(":")
        try:
            return cls(int(host), int(guest or host))
        except ValueError:
            raise ConfigValidationError(
                f"Invalid port forward '{rule}': expected <host_port>:<guest_port>"
            ) from None

    def __str__(self) -> str:
        return f"{self.host_port}:{self.guest_port}"


@dataclass(frozen=True)
class RunConfig:
    """
    Launch parameters handed to the hypervisor launcher.

    `cmd` is the command line the image boots with; for configuration sets
    resolved by a ConfigRegistry it points at the persisted boot command.
    """

    instance_name: str = ""
    image_name: str = ""
    hypervisor: str = "qemu"

    memory: str | int = "1G"
    """Memory size ("1G", "512M" or plain megabytes)."""

    cpus: int = 2
    networking: str = "nat"

    bridge: str = ""
    """Bridge (or tap interface) name for 'bridge' and 'tap' networking."""

    mac: str = ""
    nat_rules: list[NatRule] = field(default_factory=list)
    cmd: str = ""
    persist: bool = False
    verbose: bool = False

    def __post_init__(self) -> None:
        if self.cpus <= 0:
            logger.warning(f"Invalid run config: cpus must be positive, got {self.cpus}")
            raise ConfigValidationError("cpus must be positive")
        if self.networking not in NETWORKING_MODES:
            logger.warning(f"Invalid run config: unsupported networking '{self.networking}'")
            raise ConfigValidationError(
                f"{self.networking}: networking not supported. Choose one of {', '.join(NETWORKING_MODES)}"
            )
        if self.nat_rules and self.networking != "nat":
            raise ConfigValidationError("Port forwarding is only available with 'nat' networking")
        parse_memory_size(self.memory)

    @property
    def memory_mb(self) -> int:
        return parse_memory_size(self.memory)
