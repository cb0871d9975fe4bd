# tests/test_load_manifest.py
import logging
from pathlib import Path

import pytest

from conftest import manifest
from runconf import (
    JavaRuntime,
    NodeRuntime,
    RuntimeKind,
    load_manifest,
    load_package_runtime,
    parse_manifest,
)
from runconf.exceptions import EmptyConfigSetError, ManifestParseError, UnsupportedRuntimeError

logging.getLogger("runconf").setLevel(logging.DEBUG)

JAVA_MANIFEST = """
runtime: java
config_set_default: hello
config_set:
  hello:
    main: main.Hello
    classpath:
      - /
      - /package1
    xms: 256m
    jvm_args:
      - -Djava.net.preferIPv4Stack=true
    env:
      PORT: 8000
  debug:
    base: "app:hello"
    env:
      DEBUG: true
"""


def test_parse_java_manifest():
    config = parse_manifest(JAVA_MANIFEST)
    assert config.runtime_kind == RuntimeKind.JAVA
    assert config.config_set_default == "hello"
    assert config.names == ["hello", "debug"]

    hello = config.config_sets["hello"]
    assert isinstance(hello, JavaRuntime)
    assert hello.main == "main.Hello"
    assert hello.classpath == ["/", "/package1"]
    assert hello.xms == "256m"
    assert hello.jvm_args == ["-Djava.net.preferIPv4Stack=true"]
    assert hello.env == {"PORT": "8000"}

    debug = config.config_sets["debug"]
    assert debug.base == "app:hello"
    assert debug.env == {"DEBUG": "true"}
    assert debug.main == ""


def test_parse_accepts_bytes_and_nodejs_alias():
    config = parse_manifest(b"runtime: nodejs\nconfig_set:\n  web:\n    main: /server.js\n")
    assert config.runtime_kind == RuntimeKind.NODE
    assert isinstance(config.config_sets["web"], NodeRuntime)


def test_config_sets_do_not_share_state():
    config = manifest(
        """
        runtime: native
        config_set:
          a:
            bootcmd: /a
          b:
            bootcmd: /b
        """
    )
    a, b = config.config_sets["a"], config.config_sets["b"]
    assert a is not b
    assert a.env is not b.env


def test_invalid_yaml():
    with pytest.raises(ManifestParseError, match="failed to parse meta/run.yaml"):
        parse_manifest("runtime: [native")


@pytest.mark.parametrize(
    "text, message",
    [
        ("- a\n- b\n", "expected a mapping"),
        ("config_set:\n  a:\n    bootcmd: /a\n", "'runtime' must be a string"),
        ("runtime: native\nconfig_set: [a, b]\n", "'config_set' must be a mapping"),
        ("runtime: native\nconfig_set_default: [a]\nconfig_set:\n  a: {}\n", "'config_set_default'"),
    ],
)
def test_malformed_outer_shape(text, message):
    with pytest.raises(ManifestParseError, match=message):
        parse_manifest(text)


def test_unknown_runtime():
    with pytest.raises(UnsupportedRuntimeError, match="Unknown runtime: 'cobol'"):
        parse_manifest("runtime: cobol\nconfig_set:\n  a: {}\n")


@pytest.mark.parametrize("text", ["runtime: native\n", "runtime: native\nconfig_set: {}\n"])
def test_no_config_sets(text):
    with pytest.raises(EmptyConfigSetError, match="at least one config_set must be provided"):
        parse_manifest(text)


def test_bad_config_set_fields_name_the_set():
    with pytest.raises(ManifestParseError, match="configset 'run'.*unexpected field.*main") as exc_info:
        parse_manifest("runtime: native\nconfig_set:\n  run:\n    main: x\n")
    assert exc_info.value.config_set == "run"


def test_config_set_must_be_mapping():
    with pytest.raises(ManifestParseError, match="configset 'run': expected a mapping"):
        parse_manifest("runtime: native\nconfig_set:\n  run: /bin/app\n")


def test_java_classpath_must_be_list():
    with pytest.raises(ManifestParseError, match="'classpath' must be a list"):
        parse_manifest("runtime: java\nconfig_set:\n  a:\n    main: M\n    classpath: /\n")


def _write_package(root: Path, text: str) -> Path:
    (root / "meta").mkdir(parents=True)
    (root / "meta" / "run.yaml").write_text(text)
    return root


def test_load_manifest_from_package_dir(tmp_path: Path):
    pkg = _write_package(tmp_path / "pkg", JAVA_MANIFEST)
    config = load_manifest(pkg)
    assert config is not None
    assert config.names == ["hello", "debug"]

    same = load_manifest(pkg / "meta" / "run.yaml")
    assert same.names == config.names


def test_load_manifest_missing_returns_none(tmp_path: Path):
    assert load_manifest(tmp_path) is None
    assert load_manifest(tmp_path / "nope.yaml") is None


def test_load_package_runtime(tmp_path: Path, caplog):
    pkg = _write_package(tmp_path / "pkg", JAVA_MANIFEST)
    with caplog.at_level(logging.INFO, logger="runconf"):
        rt = load_package_runtime(pkg)
    assert isinstance(rt, JavaRuntime)
    assert rt.main == ""
    assert rt.dependencies() == ["openjdk8-zulu-compact1"]
    assert "Resolved runtime into: java" in caplog.text


def test_load_package_runtime_ignores_set_bodies(tmp_path: Path):
    # Set bodies are not populated, so field errors inside them do not matter here
    pkg = _write_package(tmp_path / "pkg", "runtime: node\nconfig_set:\n  a:\n    bogus: 1\n")
    assert isinstance(load_package_runtime(pkg), NodeRuntime)
    assert load_package_runtime(tmp_path / "empty") is None
