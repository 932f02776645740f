"""PermissionRuleSet - merged only/except groups for one navigation attempt."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from statepermit.domain.permission.model.redirect import RedirectTarget
    from statepermit.domain.permission.model.transition import Transition

RuleGroup = tuple[str, ...]

# A redirect rule is a state name, a target mapping, a nested dispatch mapping,
# a RedirectTarget, or a callable (denied_name, transition) returning any of those.
RedirectRule = Union[
    str,
    Mapping[str, Any],
    "RedirectTarget",
    Callable[[str, "Transition | None"], Any],
    Callable[[str, "Transition | None"], Awaitable[Any]],
]


def _as_group(names: str | Iterable[str]) -> RuleGroup:
    if isinstance(names, str):
        return (names,) if names else ()
    return tuple(name for name in names if name)


def _normalize_groups(groups: str | Iterable[str | Iterable[str]]) -> tuple[RuleGroup, ...]:
    # A bare name is one group of one name, never a sequence of characters
    if isinstance(groups, str):
        groups = (groups,)
    normalized = (_as_group(group) for group in groups)
    return tuple(group for group in normalized if group)


@dataclass(frozen=True)
class PermissionRuleSet:
    """Rule groups evaluated by the authorization engine.

    ``except_`` groups are checked first; a match in any of them denies.
    ``only`` groups are ANDed together, names inside a group are ORed.
    Empty groups are dropped: they neither restrict nor match.
    """

    only: tuple[RuleGroup, ...] = ()
    except_: tuple[RuleGroup, ...] = ()
    redirect_to: Mapping[str, RedirectRule] | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "only", _normalize_groups(self.only))
        object.__setattr__(self, "except_", _normalize_groups(self.except_))
        if self.redirect_to is not None:
            object.__setattr__(self, "redirect_to", MappingProxyType(dict(self.redirect_to)))

    @property
    def is_unrestricted(self) -> bool:
        """True when neither only nor except groups are present."""
        return not self.only and not self.except_

    def extend(
        self,
        *,
        only: str | Iterable[str] = (),
        except_: str | Iterable[str] = (),
        redirect_to: Mapping[str, RedirectRule] | None = None,
    ) -> PermissionRuleSet:
        """Return a new rule set with one more ancestor's declaration folded in.

        Non-empty ``only``/``except_`` are appended as single groups; a bare
        name counts as a group holding just that name.
        ``redirect_to`` keys override existing keys of the same name.
        """
        merged_redirect = self.redirect_to
        if redirect_to is not None:
            merged_redirect = {**(self.redirect_to or {}), **redirect_to}

        only_group = _as_group(only)
        except_group = _as_group(except_)
        return PermissionRuleSet(
            only=self.only + ((only_group,) if only_group else ()),
            except_=self.except_ + ((except_group,) if except_group else ()),
            redirect_to=merged_redirect,
        )

