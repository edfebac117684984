"""Catalog of rooted tree topologies, written in nested-set notation.

Each entry is ``(leaf count, id)``. Leaves are labelled ``1..n`` and every
internal node lists its children. The catalog holds every rooted tree shape
with 3, 4 and 5 leaves and every binary shape with 6 leaves.
"""

TREE_IDS = (
    # 3 leaves
    (3, "{1, 2, 3}"),
    (3, "{{1, 2}, 3}"),

    # 4 leaves
    (4, "{1, 2, 3, 4}"),
    (4, "{{1, 2}, 3, 4}"),
    (4, "{{1, 2, 3}, 4}"),
    (4, "{{{1, 2}, 3}, 4}"),
    (4, "{{1, 2}, {3, 4}}"),

    # 5 leaves
    (5, "{1, 2, 3, 4, 5}"),
    (5, "{{1, 2}, 3, 4, 5}"),
    (5, "{{1, 2, 3}, 4, 5}"),
    (5, "{{1, 2}, {3, 4}, 5}"),
    (5, "{{{1, 2}, 3}, 4, 5}"),
    (5, "{{1, 2, 3, 4}, 5}"),
    (5, "{{{1, 2}, 3, 4}, 5}"),
    (5, "{{{1, 2, 3}, 4}, 5}"),
    (5, "{{{1, 2}, {3, 4}}, 5}"),
    (5, "{{{{1, 2}, 3}, 4}, 5}"),
    (5, "{{1, 2, 3}, {4, 5}}"),
    (5, "{{{1, 2}, 3}, {4, 5}}"),

    # 6 leaves, binary
    (6, "{{{{{1, 2}, 3}, 4}, 5}, 6}"),
    (6, "{{{{1, 2}, {3, 4}}, 5}, 6}"),
    (6, "{{{{1, 2}, 3}, {4, 5}}, 6}"),
    (6, "{{{{1, 2}, 3}, 4}, {5, 6}}"),
    (6, "{{{1, 2}, {3, 4}}, {5, 6}}"),
    (6, "{{{1, 2}, 3}, {{4, 5}, 6}}"),
)
