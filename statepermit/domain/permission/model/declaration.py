"""PermissionDeclaration - one state's own ``permissions`` payload, normalized."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from statepermit.domain.permission.model.redirect import RedirectTarget
from statepermit.domain.permission.model.rule_set import RedirectRule, RuleGroup
from statepermit.domain.shared.error import MalformedDeclarationError

if TYPE_CHECKING:
    from statepermit.domain.permission.model.transition import Transition

DEFAULT_REDIRECT_KEY = "default"


@dataclass(frozen=True)
class PermissionDeclaration:
    """Normalized ``{only, except, redirectTo}`` declaration of a single state."""

    only: RuleGroup = ()
    except_: RuleGroup = ()
    redirect_to: Mapping[str, RedirectRule] | None = None

    @classmethod
    def parse(
        cls,
        raw: Any,
        transition: Transition | None = None,
        *,
        default_key: str = DEFAULT_REDIRECT_KEY,
    ) -> PermissionDeclaration:
        """Normalize a raw declaration.

        ``only`` and ``except`` accept a name, a collection of names, or a
        callable taking the transition and returning either of those.
        ``redirectTo`` (or ``redirect_to``) accepts a state name, a callable,
        a single target mapping with a ``state`` key, or a mapping of denied
        names to any of those. Single rules are stored under ``default_key``.

        Raises:
            MalformedDeclarationError: If any part has an unsupported shape.
        """
        if isinstance(raw, PermissionDeclaration):
            return raw
        if not isinstance(raw, Mapping):
            raise MalformedDeclarationError(
                f"Permission declaration must be a mapping, got {type(raw).__name__}",
                code="malformed_declaration",
            )

        except_raw = raw.get("except", raw.get("except_"))
        redirect_raw = raw.get("redirectTo", raw.get("redirect_to"))

        return cls(
            only=_normalize_names(raw.get("only"), transition, "only"),
            except_=_normalize_names(except_raw, transition, "except"),
            redirect_to=_normalize_redirect(redirect_raw, default_key),
        )


def _normalize_names(
    value: Any,
    transition: Transition | None,
    prop: str,
    *,
    allow_callable: bool = True,
) -> RuleGroup:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,) if value else ()
    if callable(value) and allow_callable:
        return _normalize_names(value(transition), transition, prop, allow_callable=False)
    if isinstance(value, (set, frozenset)):
        value = sorted(value)
    if isinstance(value, (list, tuple)):
        if not all(isinstance(name, str) for name in value):
            raise MalformedDeclarationError(
                f'Property "{prop}" must contain only strings',
                code="malformed_declaration",
            )
        return tuple(name for name in value if name)

    raise MalformedDeclarationError(
        f'Property "{prop}" must be a string, a list of strings or a function',
        code="malformed_declaration",
    )


def _is_rule(value: Any) -> bool:
    return isinstance(value, (str, Mapping, RedirectTarget)) or callable(value)


def _normalize_redirect(value: Any, default_key: str) -> dict[str, RedirectRule] | None:
    if value is None or value == "":
        return None
    if isinstance(value, (str, RedirectTarget)) or callable(value):
        return {default_key: value}
    if isinstance(value, Mapping):
        # A mapping carrying "state" is one target, not a per-name dispatch table
        if "state" in value:
            return {default_key: value}

        rules: dict[str, RedirectRule] = {}
        for key, rule in value.items():
            if rule is None or rule == "":
                continue
            if not _is_rule(rule):
                raise MalformedDeclarationError(
                    f'Redirect rule for "{key}" must be a string, mapping or function',
                    code="malformed_declaration",
                )
            rules[str(key)] = rule
        return rules

    raise MalformedDeclarationError(
        'Property "redirectTo" must be a string, a function or a mapping',
        code="malformed_declaration",
    )
