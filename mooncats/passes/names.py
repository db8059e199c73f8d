"""Helpers for dotted member names such as ``table.field``."""

from mooncats.errors import DocItemError


def split_member(name: str) -> tuple[str, str]:
    """Split ``owner.member`` on the first dot.

    Raises:
        DocItemError: If the name has no owner part.
    """
    owner, dot, member = name.partition('.')
    if not dot or not owner or not member:
        raise DocItemError(f"Invalid member name {name}")
    return owner, member
