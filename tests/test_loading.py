"""Tests for lamp file discovery and FixtureRegistry.load_lamp_files."""

import sys
from pathlib import Path

import pytest

from magic_lamp.config import LampConfig
from magic_lamp.discovery import find_config_file, find_lamp_files, resolve_fixtures_root
from magic_lamp.errors import AlreadyRegisteredFixtureError, ConfigurationError
from magic_lamp.registry import FixtureRegistry
from tests.support import write_project


class TestResolveFixturesRoot:
    def test_prefers_spec(self, tmp_path: Path) -> None:
        (tmp_path / "spec").mkdir()
        (tmp_path / "test").mkdir()
        assert resolve_fixtures_root(tmp_path) == tmp_path / "spec"

    def test_falls_back_to_test(self, tmp_path: Path) -> None:
        assert resolve_fixtures_root(tmp_path) == tmp_path / "test"

    def test_registry_path(self, project: Path) -> None:
        registry = FixtureRegistry(LampConfig(root=project))
        assert registry.path() == project / "spec"
        assert registry.fixtures_path() == project / "spec" / "magic_lamp"


class TestFindLampFiles:
    def test_sorted_and_recursive(self, project: Path) -> None:
        lamp_dir = project / "spec" / "magic_lamp"
        files = find_lamp_files(lamp_dir)
        assert files == [lamp_dir / "index_lamp.py", lamp_dir / "orders" / "orders_lamp.py"]

    def test_skips_private_directories(self, project: Path) -> None:
        lamp_dir = project / "spec" / "magic_lamp"
        (lamp_dir / "_drafts").mkdir()
        (lamp_dir / "_drafts" / "draft_lamp.py").write_text("raise RuntimeError")
        assert all("_drafts" not in str(f) for f in find_lamp_files(lamp_dir))

    def test_ignores_other_python_files(self, project: Path) -> None:
        lamp_dir = project / "spec" / "magic_lamp"
        (lamp_dir / "helpers.py").write_text("raise RuntimeError")
        assert lamp_dir / "helpers.py" not in find_lamp_files(lamp_dir)

    def test_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="Fixtures directory not found"):
            find_lamp_files(tmp_path / "nope")

    def test_find_config_file(self, project: Path) -> None:
        lamp_dir = project / "spec" / "magic_lamp"
        found = find_config_file([lamp_dir, lamp_dir.parent], "magic_lamp_config.py")
        assert found == lamp_dir / "magic_lamp_config.py"


class TestLoadLampFiles:
    def test_loads_all_lamp_files(self, project_registry: FixtureRegistry) -> None:
        project_registry.load_lamp_files()
        assert project_registry.names() == ["index", "orders/bar", "orders/foo", "orders/order"]

    def test_new_mapping_on_each_call(self, project_registry: FixtureRegistry) -> None:
        old_registry = project_registry.registered_fixtures
        project_registry.load_lamp_files()
        assert project_registry.registered_fixtures is not old_registry

        old_registry = project_registry.registered_fixtures
        project_registry.load_lamp_files()
        assert project_registry.registered_fixtures is not old_registry
        assert project_registry.registered_fixtures.keys() == old_registry.keys()

    def test_discards_direct_registrations(self, project_registry: FixtureRegistry) -> None:
        project_registry.register_fixture(lambda c: c.render("index"), name="stale")
        project_registry.load_lamp_files()
        assert not project_registry.registered("stale")

    def test_generates_from_templates_on_disk(self, project_registry: FixtureRegistry) -> None:
        project_registry.load_lamp_files()
        assert project_registry.generate_all_fixtures() == {
            "index": "<h1>Index</h1>",
            "orders/bar": "bar",
            "orders/foo": "foo",
            "orders/order": "<li>Order 7</li>",
        }

    def test_test_directory_layout(self, tmp_path: Path) -> None:
        write_project(tmp_path, fixtures_root="test")
        registry = FixtureRegistry(LampConfig(root=tmp_path))
        registry.load_lamp_files()
        assert registry.registered("orders/foo")

    def test_explicit_directory(self, project: Path, tmp_path_factory) -> None:
        registry = FixtureRegistry(LampConfig(root=tmp_path_factory.mktemp("elsewhere")))
        registry.load_lamp_files(project / "spec" / "magic_lamp")
        assert registry.registered("index")

    def test_failed_load_keeps_previous_mapping(self, project_registry: FixtureRegistry) -> None:
        project_registry.load_lamp_files()
        previous = project_registry.registered_fixtures

        duplicate = project_registry.fixtures_path() / "zz_duplicate_lamp.py"
        duplicate.write_text(
            "import magic_lamp\nmagic_lamp.register_fixture(lambda c: c.render('index'))\n"
        )
        with pytest.raises(AlreadyRegisteredFixtureError, match="'index'"):
            project_registry.load_lamp_files()
        assert project_registry.registered_fixtures is previous

    def test_lamp_file_with_dataclass_model(self, project_registry: FixtureRegistry) -> None:
        lamp = project_registry.fixtures_path() / "model_lamp.py"
        lamp.write_text(
            "from __future__ import annotations\n"
            "\n"
            "from dataclasses import dataclass\n"
            "\n"
            "import magic_lamp\n"
            "\n"
            "\n"
            "@dataclass\n"
            "class Order:\n"
            "    id: int\n"
            "\n"
            "\n"
            "magic_lamp.register_fixture(\n"
            "    lambda c: c.render(plain=Order(id=3).id), name='model'\n"
            ")\n"
        )
        project_registry.load_lamp_files()
        assert project_registry.generate_fixture("model") == "3"

    def test_lamp_modules_are_not_left_in_sys_modules(
        self, project_registry: FixtureRegistry
    ) -> None:
        project_registry.load_lamp_files()
        assert not [name for name in sys.modules if name.startswith("_magic_lamp_")]

    def test_lamp_files_do_not_touch_default_registry(
        self, project_registry: FixtureRegistry
    ) -> None:
        from magic_lamp.context import default_registry

        before = dict(default_registry().registered_fixtures)
        project_registry.load_lamp_files()
        assert default_registry().registered_fixtures == before


class TestLoadConfig:
    def test_config_file_runs_on_load(self, project_registry: FixtureRegistry) -> None:
        project_registry.load_lamp_files()
        loaded_from = project_registry.configuration.global_defaults["loaded_from"]
        assert loaded_from.endswith("magic_lamp_config.py")

    def test_config_is_reset_on_each_load(self, project_registry: FixtureRegistry) -> None:
        project_registry.configuration.global_defaults["stale"] = True
        project_registry.load_config()
        assert "stale" not in project_registry.configuration.global_defaults
        assert "loaded_from" in project_registry.configuration.global_defaults

    def test_config_in_fixtures_root(self, project: Path) -> None:
        lamp_dir = project / "spec" / "magic_lamp"
        (lamp_dir / "magic_lamp_config.py").rename(project / "spec" / "magic_lamp_config.py")
        registry = FixtureRegistry(LampConfig(root=project))
        registry.load_config()
        assert "loaded_from" in registry.configuration.global_defaults

    def test_no_config_file(self, tmp_path: Path) -> None:
        registry = FixtureRegistry(LampConfig(root=tmp_path))
        configuration = registry.load_config()
        assert configuration.global_defaults == {}
        assert configuration.infer_names is True
