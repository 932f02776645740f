"""Unit tests for InMemoryStateRegistry and states files."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from statepermit.domain.shared.error import ConfigurationError, NotFoundError
from statepermit.infrastructure.memory.state_registry import InMemoryStateRegistry, StatesFile

STATES_YAML = """\
states:
  - name: app
    permissions:
      redirectTo: login
  - name: app.admin
    permissions:
      only: [admin]
  - name: app.admin.audit
  - name: reports
    parent: app
    permissions:
      except: banned
"""


class TestRegister:
    def test_dotted_name_implies_parent(self):
        registry = InMemoryStateRegistry()
        registry.register("app")
        state = registry.register("app.admin", {"only": ["admin"]})

        assert state.parent == "app"
        assert state.has_own_permissions

    def test_child_inherits_permissions_by_reference(self):
        registry = InMemoryStateRegistry()
        parent = registry.register("app", {"only": ["member"]})
        child = registry.register("app.home")

        assert child.permissions is parent.permissions
        assert not child.has_own_permissions

    def test_unknown_parent_is_rejected(self):
        with pytest.raises(ConfigurationError, match="app"):
            InMemoryStateRegistry().register("app.admin")

    def test_duplicate_state_is_rejected(self):
        registry = InMemoryStateRegistry()
        registry.register("app")
        with pytest.raises(ConfigurationError):
            registry.register("app")


class TestPath:
    def test_path_is_root_first(self):
        registry = InMemoryStateRegistry()
        registry.register("app")
        registry.register("app.admin")
        registry.register("app.admin.users")

        assert [s.name for s in registry.path("app.admin.users")] == [
            "app",
            "app.admin",
            "app.admin.users",
        ]

    def test_path_of_unknown_state(self):
        with pytest.raises(NotFoundError):
            InMemoryStateRegistry().path("nowhere")

    def test_get_unknown_state_is_none(self):
        assert InMemoryStateRegistry().get("nowhere") is None


class TestStatesFile:
    def test_load_and_register(self, tmp_path: Path):
        path = tmp_path / "states.yaml"
        path.write_text(STATES_YAML)

        registry = InMemoryStateRegistry.from_states_file(StatesFile.load(path))

        assert registry.names() == ["app", "app.admin", "app.admin.audit", "reports"]
        assert registry.get("reports").parent == "app"
        assert registry.get("app.admin.audit").has_own_permissions is False
        assert registry.get("app.admin").permissions == {"only": ["admin"]}

    def test_empty_file_has_no_states(self, tmp_path: Path):
        path = tmp_path / "states.yaml"
        path.write_text("")
        assert StatesFile.load(path).states == []

    def test_invalid_structure(self):
        with pytest.raises(ValidationError):
            StatesFile.model_validate({"states": [{"parent": "app"}]})
