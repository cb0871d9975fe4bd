# tests/test_examples.py
"""The bundled example project resolves end to end."""

from pathlib import Path

from conftest import env_tokens
from runconf import build_registry, load_config
from runconf.java_runtime import JAVA_LAUNCHER

EXAMPLE = Path(__file__).parent.parent / "examples" / "java_app" / "runconf.toml"


def test_java_app_example(tmp_path: Path):
    config = load_config(EXAMPLE)
    registry = build_registry(config)
    resolved = {r.name: r for r in registry.persist(tmp_path)}

    assert sorted(resolved) == ["hello", "java", "tuned"]

    hello = resolved["hello"].boot_cmd
    assert hello.endswith(JAVA_LAUNCHER)
    assert env_tokens(hello) == {
        "--env=XMS=512m",
        "--env=XMX=1g",
        "--env=CLASSPATH=/:/lib",
        "--env=JVM_ARGS=-Dx=y",
        "--env=MAIN=main.Hello",
        "--env=ARGS=world",
    }

    tuned = resolved["tuned"].boot_cmd
    assert env_tokens(tuned) == {
        "--env=XMS=512m",
        "--env=XMX=2g",
        "--env=CLASSPATH=/",
        "--env=JVM_ARGS=-Duser.dir=/",
        "--env=MAIN=main.Hello",
        "--env=GREETING?=hi",
    }
    assert resolved["tuned"].dependencies == ["openjdk8-zulu-compact1"]

    assert (tmp_path / "run" / "tuned").read_text() == tuned

    run = registry.run_config(config.target_package, config.run_config_set)
    assert run.cmd == "runscript /run/hello"
    assert config.run.memory_mb == 2048
