# runconf/exceptions.py
"""
Custom exception hierarchy for runconf.

All runconf-specific exceptions inherit from RunconfError to enable
catch-all error handling while still providing specific exception types
for different error conditions.

Errors raised while a registry resolves its packages carry the package and
configuration set they occurred in, so a failing pass can be diagnosed
without re-running it.
"""

from __future__ import annotations


class RunconfError(Exception):
    """
    Base exception for all runconf errors.

    Catch this to handle any runconf-specific error.

    Attributes:
        message: Error message without location prefix
        package: Package the error occurred in (if known)
        config_set: Configuration set the error occurred in (if known)
    """

    def __init__(
        self,
        message: str,
        *,
        package: str | None = None,
        config_set: str | None = None,
    ):
        self.message = message
        self.package = package
        self.config_set = config_set
        super().__init__(message)

    def add_context(
        self, *, package: str | None = None, config_set: str | None = None
    ) -> RunconfError:
        """
        Fill in location context a deeper frame did not know about.

        Returns self so callers can `raise err.add_context(...)`.
        """
        if self.package is None:
            self.package = package
        if self.config_set is None:
            self.config_set = config_set
        return self

    @property
    def location(self) -> str | None:
        if self.package and self.config_set:
            return f"{self.package}:{self.config_set}"
        return self.package or self.config_set

    def __str__(self) -> str:
        where = self.location
        if where:
            return f"[{where}] {self.message}"
        return self.message


class ManifestParseError(RunconfError):
    """
    Raised when a run manifest is not valid YAML or has the wrong shape.

    Example:
        >>> parse_manifest("runtime: [native")
        ManifestParseError: failed to parse meta/run.yaml: ...
    """

    pass


class UnsupportedRuntimeError(RunconfError):
    """
    Raised when a manifest declares a runtime kind that is not supported.

    Attributes:
        runtime: The unknown runtime name as written in the manifest
    """

    def __init__(self, runtime: object):
        self.runtime = runtime
        super().__init__(f"Unknown runtime: '{runtime}'")


class EmptyConfigSetError(RunconfError):
    """Raised when a manifest yields zero configuration sets."""

    def __init__(self) -> None:
        super().__init__(
            "failed to parse meta/run.yaml: at least one config_set must be provided"
        )


class MissingFieldError(RunconfError):
    """
    Raised when a configuration set without `base` lacks a required field.

    Attributes:
        field: Name of the missing manifest field
    """

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"'{field}' must be provided")


class InvalidEnvEntryError(RunconfError):
    """
    Raised when an environment key or value contains a space.

    Attributes:
        key: Offending environment key
        value: Its value
    """

    def __init__(self, key: str, value: str):
        self.key = key
        self.value = value
        super().__init__(f"spaces not allowed in env key/value: '{key}':'{value}'")


class InvalidBaseFormatError(RunconfError):
    """
    Raised when `base` is not of the form <package>:<config_set>.

    Attributes:
        base: The malformed reference
    """

    def __init__(self, base: str):
        self.base = base
        super().__init__(f"'base' must be in format <pkg_name>:<config_set>, got '{base}'")


class UnresolvedReferenceError(RunconfError):
    """
    Raised when `base` points at a package or configuration set that is not
    available in the registry.

    Attributes:
        reference: The `package:config_set` reference
        reason: Why it could not be resolved
    """

    def __init__(self, reference: str, reason: str):
        self.reference = reference
        self.reason = reason
        super().__init__(f"Failed to inherit from '{reference}': {reason}")


class CyclicReferenceError(RunconfError):
    """
    Raised when `base` references form a cycle.

    Attributes:
        reference: The reference that closes the cycle
        chain: Ordered references visited before the cycle closed
    """

    def __init__(self, reference: str, chain: list[str]):
        self.reference = reference
        self.chain = chain
        cycle_display = " -> ".join(chain) + f" -> {reference}"
        super().__init__(f"Inheritance cycle detected: {cycle_display}")


class ConfigSetNotFoundError(RunconfError):
    """
    Raised when a configuration set is requested by a name the package
    does not declare.

    Attributes:
        name: Requested configuration set
        available: Names the package declares
    """

    def __init__(self, name: str, available: list[str]):
        self.name = name
        self.available = available
        super().__init__(
            "Could not select which configuration set to run: "
            f"configuration set name '{name}' not one of {_format_names(available)}"
        )


class AmbiguousConfigSetError(RunconfError):
    """
    Raised when no configuration set is named, no default is declared and
    the package has more than one.

    Attributes:
        available: Names the package declares
    """

    def __init__(self, available: list[str]):
        self.available = available
        super().__init__(
            "Could not select which configuration set to run: "
            "neither a configuration set name is provided nor config_set_default is set. "
            f"Available names: {_format_names(available)}"
        )


class ConfigValidationError(RunconfError):
    """
    Raised when the TOML project file or launch parameters are invalid.

    Example:
        >>> load_config(io.BytesIO(b""))
        ConfigValidationError: At least one [[package]] is required
    """

    pass


def _format_names(names: list[str]) -> str:
    return "[" + ", ".join(f"'{n}'" for n in names) + "]"
