"""
Node search over names, descriptions and vendors.
"""

from typing import Sequence

from securechain.models.graph import Node

DEFAULT_RESULT_LIMIT = 8
DEFAULT_MIN_QUERY_LENGTH = 2


def search_nodes(
    nodes: Sequence[Node],
    query: str,
    limit: int = DEFAULT_RESULT_LIMIT,
    min_query_length: int = DEFAULT_MIN_QUERY_LENGTH,
) -> list[Node]:
    """
    Case-insensitive substring search.

    Queries shorter than ``min_query_length`` (after stripping) match
    nothing. Results keep node order and are capped at ``limit``.
    """
    if len(query.strip()) < min_query_length:
        return []

    needle = query.lower()
    matches = [
        node
        for node in nodes
        if needle in node.name.lower()
        or (node.description is not None and needle in node.description.lower())
        or (node.vendor is not None and needle in node.vendor.lower())
    ]
    return matches[:limit]
