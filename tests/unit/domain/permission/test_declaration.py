"""Unit tests for PermissionDeclaration.parse normalization."""

import pytest

from statepermit.domain.permission.model.declaration import PermissionDeclaration
from statepermit.domain.permission.model.redirect import RedirectTarget
from statepermit.domain.permission.model.transition import Transition
from statepermit.domain.shared.error import MalformedDeclarationError


class TestOnlyAndExcept:
    def test_string_becomes_single_name_group(self):
        declaration = PermissionDeclaration.parse({"only": "admin", "except": "banned"})
        assert declaration.only == ("admin",)
        assert declaration.except_ == ("banned",)

    def test_list_is_kept_in_order(self):
        declaration = PermissionDeclaration.parse({"only": ["editor", "admin"]})
        assert declaration.only == ("editor", "admin")

    def test_missing_properties_are_empty(self):
        declaration = PermissionDeclaration.parse({})
        assert declaration.only == ()
        assert declaration.except_ == ()
        assert declaration.redirect_to is None

    def test_callable_receives_transition(self):
        """Function-valued rules are evaluated against the attempted transition."""
        transition = Transition(to_state="reports", to_params={"team": "ops"})

        def only(t):
            return [f"team:{t.to_params['team']}"]

        declaration = PermissionDeclaration.parse({"only": only}, transition)
        assert declaration.only == ("team:ops",)

    def test_except_underscore_alias(self):
        declaration = PermissionDeclaration.parse({"except_": ["banned"]})
        assert declaration.except_ == ("banned",)

    def test_non_string_names_are_malformed(self):
        with pytest.raises(MalformedDeclarationError):
            PermissionDeclaration.parse({"only": ["admin", 42]})

    def test_unsupported_type_is_malformed(self):
        with pytest.raises(MalformedDeclarationError):
            PermissionDeclaration.parse({"only": 42})

    def test_non_mapping_declaration_is_malformed(self):
        with pytest.raises(MalformedDeclarationError, match="mapping"):
            PermissionDeclaration.parse(["admin"])

    def test_declaration_instance_passes_through(self):
        declaration = PermissionDeclaration(only=("admin",))
        assert PermissionDeclaration.parse(declaration) is declaration


class TestRedirectTo:
    def test_string_becomes_default_rule(self):
        declaration = PermissionDeclaration.parse({"redirectTo": "login"})
        assert declaration.redirect_to == {"default": "login"}

    def test_function_becomes_default_rule(self):
        def redirect(name, transition):
            return "login"

        declaration = PermissionDeclaration.parse({"redirectTo": redirect})
        assert declaration.redirect_to == {"default": redirect}

    def test_single_target_mapping_becomes_default_rule(self):
        target = {"state": "login", "params": {"next": "admin"}}
        declaration = PermissionDeclaration.parse({"redirect_to": target})
        assert declaration.redirect_to == {"default": target}

    def test_redirect_target_becomes_default_rule(self):
        target = RedirectTarget(state="login")
        declaration = PermissionDeclaration.parse({"redirectTo": target})
        assert declaration.redirect_to == {"default": target}

    def test_per_name_mapping_drops_undefined_entries(self):
        declaration = PermissionDeclaration.parse(
            {"redirectTo": {"banned": {"state": "error.banned"}, "default": None}}
        )
        assert declaration.redirect_to == {"banned": {"state": "error.banned"}}

    def test_empty_state_names_are_dropped(self):
        declaration = PermissionDeclaration.parse({"redirectTo": {"banned": "", "default": "home"}})
        assert declaration.redirect_to == {"default": "home"}
        assert PermissionDeclaration.parse({"redirectTo": ""}).redirect_to is None

    def test_custom_default_key(self):
        declaration = PermissionDeclaration.parse({"redirectTo": "login"}, default_key="*")
        assert declaration.redirect_to == {"*": "login"}

    def test_invalid_rule_value_is_malformed(self):
        with pytest.raises(MalformedDeclarationError, match="banned"):
            PermissionDeclaration.parse({"redirectTo": {"banned": 3}})

    def test_invalid_redirect_type_is_malformed(self):
        with pytest.raises(MalformedDeclarationError):
            PermissionDeclaration.parse({"redirectTo": 3})
