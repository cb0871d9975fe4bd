# tests/test_load_config.py

import io
import logging
from pathlib import Path

import pytest

from runconf import build_registry, load_config
from runconf.exceptions import ConfigValidationError, ManifestParseError

logging.getLogger("runconf").setLevel(logging.DEBUG)


@pytest.fixture
def minimal_toml():
    return io.BytesIO(
        b"""
[[package]]
name = "app"
"""
    )


def test_load_minimal_config(minimal_toml):
    config = load_config(minimal_toml)
    assert [p.name for p in config.packages] == ["app"]
    assert config.target_package == "app"
    assert config.run.networking == "nat"
    assert config.run.cmd == ""
    assert config.run_config_set is None
    assert Path(config.mpm_dir).name == ".runconf"


def test_relative_paths_resolved_against_config_file(tmp_path: Path):
    config_file = tmp_path / "runconf.toml"
    config_file.write_text(
        """
mpm_dir = "build/mpm"

[[package]]
name = "os"
path = "./packages/os"

[[package]]
name = "app"
manifest = "/absolute/meta/run.yaml"
"""
    )

    config = load_config(str(config_file))
    os_pkg, app_pkg = config.packages
    assert os_pkg.path == str(tmp_path.resolve() / "packages" / "os")
    assert app_pkg.manifest == "/absolute/meta/run.yaml"
    assert config.mpm_dir == str(tmp_path.resolve() / "build" / "mpm")


def test_run_section():
    config = load_config(
        io.BytesIO(
            b"""
[run]
package = "os"
config_set = "shell"
memory = "2G"
cpus = 4
nat_rules = ["8080:80", "22"]

[[package]]
name = "os"

[[package]]
name = "app"
"""
        )
    )
    assert config.target_package == "os"
    assert config.run_config_set == "shell"
    assert config.run.memory_mb == 2048
    assert config.run.cpus == 4
    assert [str(r) for r in config.run.nat_rules] == ["8080:80", "22:22"]


def test_empty_package_list():
    with pytest.raises(ConfigValidationError, match="At least one \\[\\[package\\]\\] is required"):
        load_config(io.BytesIO(b""))


def test_package_must_be_array_of_tables():
    with pytest.raises(ConfigValidationError, match="must be an array of tables"):
        load_config(io.BytesIO(b'package = "app"\n'))


def test_unknown_package_key():
    with pytest.raises(ConfigValidationError, match="Invalid config in \\[\\[package\\]\\]"):
        load_config(io.BytesIO(b'[[package]]\nname = "app"\nversion = "1.0"\n'))


@pytest.mark.parametrize("name", ["", "a:b"])
def test_invalid_package_name(name):
    toml = f'[[package]]\nname = "{name}"\n'.encode()
    with pytest.raises(ConfigValidationError, match="Package name"):
        load_config(io.BytesIO(toml))


def test_duplicate_package_names():
    toml = b'[[package]]\nname = "a"\n[[package]]\nname = "a"\n'
    with pytest.raises(ConfigValidationError, match="Duplicate package names: a"):
        load_config(io.BytesIO(toml))


def test_run_package_must_be_listed():
    toml = b'[run]\npackage = "ghost"\n[[package]]\nname = "a"\n'
    with pytest.raises(ConfigValidationError, match="'ghost' is not one of"):
        load_config(io.BytesIO(toml))


def test_run_cmd_not_configurable():
    toml = b'[run]\ncmd = "/bin/sh"\n[[package]]\nname = "a"\n'
    with pytest.raises(ConfigValidationError, match="cmd is derived"):
        load_config(io.BytesIO(toml))


def test_invalid_run_values():
    with pytest.raises(ConfigValidationError, match="networking not supported"):
        load_config(io.BytesIO(b'[run]\nnetworking = "wifi"\n[[package]]\nname = "a"\n'))
    with pytest.raises(ConfigValidationError, match="Invalid config in \\[run\\]"):
        load_config(io.BytesIO(b'[run]\ncolor = "red"\n[[package]]\nname = "a"\n'))


def test_invalid_toml():
    with pytest.raises(ConfigValidationError, match="Invalid TOML"):
        load_config(io.BytesIO(b"[[package]\nname = "))


def _write_manifest(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)


def test_build_registry(tmp_path: Path):
    _write_manifest(
        tmp_path / "os" / "meta" / "run.yaml",
        "runtime: native\nconfig_set:\n  boot:\n    bootcmd: /init\n",
    )
    _write_manifest(
        tmp_path / "app.yaml",
        "runtime: native\nconfig_set:\n  run:\n    base: os:boot\n",
    )
    config_file = tmp_path / "runconf.toml"
    config_file.write_text(
        """
[[package]]
name = "os"
path = "os"

[[package]]
name = "lib"

[[package]]
name = "libdir"
path = "does-not-exist"

[[package]]
name = "app"
manifest = "app.yaml"
"""
    )

    registry = build_registry(load_config(config_file))
    assert registry.packages == ["os", "lib", "libdir", "app"]
    assert registry.get("lib") is None
    assert registry.get("libdir") is None
    assert registry.resolve("app").boot_cmd == "/init"


def test_build_registry_reports_package_of_bad_manifest(tmp_path: Path):
    _write_manifest(tmp_path / "bad" / "meta" / "run.yaml", "runtime: [native\n")
    config_file = tmp_path / "runconf.toml"
    config_file.write_text('[[package]]\nname = "bad"\npath = "bad"\n')

    with pytest.raises(ManifestParseError) as exc_info:
        build_registry(load_config(config_file))
    assert exc_info.value.package == "bad"
