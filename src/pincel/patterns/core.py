"""Pattern descriptor shared by every pattern constructor.

A Pattern couples a compiled regular expression with the semantic role of
its capture groups. Patterns are immutable and are built by the pure,
memoized constructors in the sibling modules; construction is the only
place parameters are validated.

Thread Safety:
Pattern is frozen and compiled ``re.Pattern`` objects are safe to share.

"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from pincel.categories import GroupRole
from pincel.errors import InvalidParameter

# Every pattern is line oriented: ^ and $ work per line.
PATTERN_FLAGS = re.MULTILINE


@dataclass(frozen=True, slots=True)
class Pattern:
    """Regular expression plus the role of each capture group.

    Attributes:
        name: Stable identifier (e.g. "one-line-title-2")
        expression: Compiled expression
        roles: Group index -> role; indices must exist in the expression

    """

    name: str
    expression: re.Pattern[str]
    roles: Mapping[int, GroupRole] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        groups = self.expression.groups
        for index in self.roles:
            if not 0 <= index <= groups:
                raise InvalidParameter(
                    "roles",
                    index,
                    f"pattern {self.name!r} has no group {index} (it has {groups})",
                )
        object.__setattr__(self, "roles", MappingProxyType(dict(self.roles)))

    @property
    def groups(self) -> int:
        """Number of capture groups in the expression."""
        return self.expression.groups

    def has_group(self, index: int) -> bool:
        """True if the expression defines group ``index`` (0 always exists)."""
        return 0 <= index <= self.expression.groups

    def groups_with_role(self, role: GroupRole) -> tuple[int, ...]:
        """Group indices carrying ``role``, ascending."""
        return tuple(sorted(i for i, r in self.roles.items() if r is role))

    def search(self, text: str, pos: int = 0, endpos: int | None = None) -> re.Match[str] | None:
        """Search ``text[pos:endpos]`` without slicing (``^`` keeps line semantics)."""
        if endpos is None:
            endpos = len(text)
        return self.expression.search(text, pos, endpos)


def make_pattern(name: str, expression: str, roles: Mapping[int, GroupRole]) -> Pattern:
    """Compile ``expression`` (verbose syntax) into a Pattern.

    Args:
        name: Pattern identifier
        expression: Regular expression source, written in ``re.VERBOSE`` style
        roles: Group index -> role

    Returns:
        Immutable Pattern

    Raises:
        InvalidParameter: If the expression does not compile or a role refers
            to a group the expression lacks
    """
    try:
        compiled = re.compile(expression, PATTERN_FLAGS | re.VERBOSE)
    except re.error as exc:
        raise InvalidParameter("expression", name, str(exc)) from exc
    return Pattern(name, compiled, roles)


def check_level(construct: str, level: int | None, maximum: int, minimum: int = 0) -> None:
    """Validate an optional nesting level.

    Raises:
        InvalidParameter: If ``level`` is not None and outside
            ``minimum..maximum``
    """
    if level is None:
        return
    if isinstance(level, bool) or not isinstance(level, int):
        raise InvalidParameter("level", level, f"{construct}: level must be an int")
    if not minimum <= level <= maximum:
        raise InvalidParameter(
            "level", level, f"{construct}: level must be between {minimum} and {maximum}"
        )

