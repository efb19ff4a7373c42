"""Access policy for file nodes.

Single owner, binary visibility: anyone may read a public node, only
the owner may read a private one or change anything. ``None`` stands
for an anonymous requester.
"""

from server.apps.files.models import FileNode


def is_owner(node: FileNode, requester_id: int | None) -> bool:
    """Check whether the requester owns the node.

    Args:
        node: Node being accessed.
        requester_id: Resolved user id, or None when anonymous.

    Returns:
        True if the requester is the owner.
    """
    return requester_id is not None and node.owner_id == requester_id


def can_read(node: FileNode, requester_id: int | None) -> bool:
    """Check whether the requester may see the node and its content.

    Args:
        node: Node being accessed.
        requester_id: Resolved user id, or None when anonymous.

    Returns:
        True for the owner or when the node is public.
    """
    return node.is_public or is_owner(node, requester_id)


def can_mutate(node: FileNode, requester_id: int | None) -> bool:
    """Check whether the requester may change the node.

    Args:
        node: Node being accessed.
        requester_id: Resolved user id, or None when anonymous.

    Returns:
        True only for the owner.
    """
    return is_owner(node, requester_id)
