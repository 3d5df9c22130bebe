from pathlib import Path

import pytest
from kida import DictLoader, Environment

from magic_lamp.config import LampConfig
from magic_lamp.registry import FixtureRegistry
from tests.support import TEMPLATES, write_project


@pytest.fixture
def kida_env() -> Environment:
    """In-memory templates for rendering tests."""
    return Environment(loader=DictLoader(TEMPLATES))


@pytest.fixture
def registry(kida_env: Environment, tmp_path: Path) -> FixtureRegistry:
    return FixtureRegistry(LampConfig(root=tmp_path), env=kida_env)


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A project root with spec/magic_lamp lamp files and templates."""
    write_project(tmp_path)
    return tmp_path


@pytest.fixture
def project_registry(project: Path) -> FixtureRegistry:
    return FixtureRegistry(LampConfig(root=project))
