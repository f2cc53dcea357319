# ============================================================================
# FILE: mixtape/core/permissions.py
# ============================================================================
"""
Who may read, clone, publish or change what.

Pure decision functions over ids and roles, no database access. Role-dependent
rules are tables keyed by `Role`; the import-time check below refuses to load
the module if a role is missing from any table, so adding a role forces every
rule to be revisited.
"""
from enum import Enum
from typing import Optional
from mixtape.core.exceptions import ForbiddenError, NotAuthenticatedError


class Role(str, Enum):
    USER = "user"
    DJ = "dj"
    ADMIN = "admin"


# Publish toggle: role -> rule(is_owner)
_PUBLISH_RULES = {
    Role.ADMIN: lambda is_owner: True,
    Role.DJ: lambda is_owner: is_owner,
    Role.USER: lambda is_owner: False,
}

# Song catalog: role -> sees restricted songs
_SEES_RESTRICTED = {
    Role.ADMIN: True,
    Role.DJ: False,
    Role.USER: False,
}

# Catalog writes and account administration
_IS_ADMINISTRATOR = {
    Role.ADMIN: True,
    Role.DJ: False,
    Role.USER: False,
}

# May keep a public DJ profile
_HAS_DJ_PROFILE = {
    Role.ADMIN: True,
    Role.DJ: True,
    Role.USER: False,
}

for _table in (_PUBLISH_RULES, _SEES_RESTRICTED, _IS_ADMINISTRATOR, _HAS_DJ_PROFILE):
    _missing = set(Role) - set(_table)
    if _missing:
        raise RuntimeError(f"Permission table is missing roles: {sorted(r.value for r in _missing)}")


def as_role(value) -> Role:
    """Coerce a stored role string into Role (unknown values raise ValueError)"""
    return value if isinstance(value, Role) else Role(value)


def can_read_playlist(is_public: bool, owner_id: int, caller_id: Optional[int]) -> bool:
    """Public playlists are readable by anyone, private ones only by their owner"""
    if is_public:
        return True
    return caller_id is not None and caller_id == owner_id


def can_mutate_playlist(owner_id: int, caller_id: Optional[int]) -> bool:
    """Content edits are owner-only, admins included"""
    return caller_id is not None and caller_id == owner_id


def can_toggle_publish(role, is_owner: bool) -> bool:
    return _PUBLISH_RULES[as_role(role)](is_owner)


def can_see_restricted(role) -> bool:
    if role is None:
        return False
    return _SEES_RESTRICTED[as_role(role)]


def is_administrator(role) -> bool:
    return _IS_ADMINISTRATOR[as_role(role)]


def can_have_dj_profile(role) -> bool:
    return _HAS_DJ_PROFILE[as_role(role)]


def ensure_can_read_playlist(is_public: bool, owner_id: int, caller_id: Optional[int]) -> None:
    if not can_read_playlist(is_public, owner_id, caller_id):
        raise ForbiddenError("Unauthorized access")


def ensure_can_mutate_playlist(owner_id: int, caller_id: Optional[int]) -> None:
    if caller_id is None:
        raise NotAuthenticatedError("Not authenticated")
    if not can_mutate_playlist(owner_id, caller_id):
        raise ForbiddenError("Unauthorized")


def ensure_can_toggle_publish(role, is_owner: bool) -> None:
    if not can_toggle_publish(role, is_owner):
        if as_role(role) is Role.USER:
            raise ForbiddenError("Only DJs or admins can publish playlists")
        raise ForbiddenError("DJs can only publish their own playlists")


def ensure_administrator(role) -> None:
    if not is_administrator(role):
        raise ForbiddenError("Admin access only")
