# tests/conftest.py
import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))

import logging
import textwrap

import pytest
from runconf.config_registry import ConfigRegistry
from runconf.load_manifest import parse_manifest


@pytest.fixture(autouse=True)
def reset_runconf_logger():
    """Undo handlers and flags installed by setup_logging()/disable_logging()."""
    yield
    logger = logging.getLogger("runconf")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.disabled = False
    logger.propagate = True


def manifest(text: str):
    """Parse an indented YAML snippet into a PackageRuntimeConfig."""
    return parse_manifest(textwrap.dedent(text))


@pytest.fixture
def native_manifest():
    return manifest(
        """
        runtime: native
        config_set:
          run:
            bootcmd: /bin/app
            env:
              X: "1"
        """
    )


@pytest.fixture
def inheriting_manifest():
    return manifest(
        """
        runtime: native
        config_set:
          run:
            base: "P1:run"
            env:
              X: "2"
              Y: "5"
        """
    )


@pytest.fixture
def registry(native_manifest, inheriting_manifest):
    reg = ConfigRegistry()
    reg.add("P1", native_manifest)
    reg.add("P2", inheriting_manifest)
    return reg


def env_tokens(boot_cmd: str) -> set[str]:
    """All --env tokens of a boot command, order-independent."""
    return {t for t in boot_cmd.split(" ") if t.startswith("--env=")}
