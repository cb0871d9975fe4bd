"""
java_app/run.py - Resolving a Java application on top of a JVM package

This example demonstrates:
- Loading the project file with load_config()
- Building a ConfigRegistry from the package manifests
- Persisting the boot command of every configuration set
- Building the launch parameters for the default configuration set

Try it:
    python examples/java_app/run.py
"""

from pathlib import Path

from runconf import build_registry, load_config, setup_logging


def main():
    setup_logging(level="DEBUG")

    config = load_config(Path(__file__).parent / "runconf.toml")
    registry = build_registry(config)

    for item in registry.persist(config.mpm_dir):
        print(f"{item.package}:{item.name} ({item.description})")
        print(f"    {item.boot_cmd}")

    run = registry.run_config(
        config.target_package,
        config.run_config_set,
        memory=config.run.memory,
        cpus=config.run.cpus,
        nat_rules=config.run.nat_rules,
    )
    print(f"\nBoot with '{run.cmd}' ({run.memory_mb} MB, {run.cpus} CPUs)")


if __name__ == "__main__":
    main()
