"""Expand/collapse state over the static case file tree."""

import logging
from collections.abc import Iterator, Sequence

from intelx.models.schemas import FolderNode, NodeKind, TreeRow

logger = logging.getLogger(__name__)

NodePath = tuple[int, ...]


def _folder(label: str, *children: FolderNode, default_open: bool | None = None) -> FolderNode:
    return FolderNode(
        label=label, kind=NodeKind.FOLDER, children=children, default_open=default_open
    )


def _file(label: str) -> FolderNode:
    return FolderNode(label=label, kind=NodeKind.FILE)


def build_case_tree(case_number: str = "ACC/CR/2025/7/7") -> tuple[FolderNode, ...]:
    """Default document tree of a case file."""
    return (
        FolderNode(
            label=case_number,
            kind=NodeKind.SECTION,
            default_open=True,
            children=(
                _folder(
                    "Exhibit File (EF)",
                    _folder("EF01_Documentry Evidence"),
                    _folder("EF02_Forensic Report"),
                    _folder(
                        "EF03_Statements",
                        _file("Statement_1.pdf"),
                        _file("Statement_2.pdf"),
                        default_open=True,
                    ),
                    default_open=True,
                ),
                _folder(
                    "Master Files (MF)",
                    _folder("MF01_Internal Records"),
                    _folder("MF02_Commission's Order"),
                    _folder("MF03_Correspondence"),
                    _folder("MF04_Court Documents"),
                    _folder("MF05_Chain of Custody"),
                    _folder("MF06_Investigation Report"),
                    _folder("MF07_Summon Order"),
                    default_open=True,
                ),
                _folder(
                    "Operation File (OF)",
                    _folder("OF01_Search and Seizure"),
                    _folder("OF02_Arrest and Detention"),
                ),
                _folder("Sundry Files (SF)", _folder("SF01_All that are not specified")),
                _folder("Working Files (WF)", _folder("WF01_Working Documents")),
            ),
        ),
    )


CASE_TREE = build_case_tree()


class FolderTree:
    """Tracks which nodes of a fixed tree are expanded.

    Nodes are addressed by their path of child indices from the roots, so
    ``(0, 1)`` is the second child of the first root. Only container nodes
    (sections and folders) carry expansion state.
    """

    def __init__(self, roots: Sequence[FolderNode], open_depth: int = 1) -> None:
        """Build the initial expansion state.

        Args:
            roots: Top-level nodes of the tree.
            open_depth: Nodes without an explicit default_open start expanded
                when their depth is below this value.
        """
        self.roots = tuple(roots)
        self._expanded: dict[NodePath, bool] = {}
        for path, node, depth in self._walk(self.roots, (), 0):
            if node.expandable:
                default = node.default_open
                self._expanded[path] = default if default is not None else depth < open_depth

    def _walk(
        self, nodes: Sequence[FolderNode], prefix: NodePath, depth: int
    ) -> Iterator[tuple[NodePath, FolderNode, int]]:
        for i, node in enumerate(nodes):
            path = (*prefix, i)
            yield path, node, depth
            yield from self._walk(node.children, path, depth + 1)

    def node_at(self, path: Sequence[int]) -> FolderNode | None:
        nodes = self.roots
        node = None
        for i in path:
            if not 0 <= i < len(nodes):
                return None
            node = nodes[i]
            nodes = node.children
        return node

    def is_expanded(self, path: Sequence[int]) -> bool:
        return self._expanded.get(tuple(path), False)

    def expansion(self) -> dict[NodePath, bool]:
        return dict(self._expanded)

    def toggle(self, path: Sequence[int]) -> bool:
        """Flip the expansion of a container node.

        Returns:
            False for file nodes and paths that do not exist.
        """
        key = tuple(path)
        if key not in self._expanded:
            return False
        self._expanded[key] = not self._expanded[key]
        logger.debug(f"Toggled {self.node_at(key).label}: expanded={self._expanded[key]}")
        return True

    def rows(self) -> list[TreeRow]:
        """Visible rows in display order; children of collapsed nodes are skipped."""
        rows: list[TreeRow] = []

        def visit(nodes: Sequence[FolderNode], prefix: NodePath, depth: int) -> None:
            for i, node in enumerate(nodes):
                path = (*prefix, i)
                expanded = self._expanded.get(path, False)
                rows.append(
                    TreeRow(
                        path=path,
                        label=node.label,
                        kind=node.kind,
                        depth=depth,
                        expandable=node.expandable,
                        expanded=expanded,
                    )
                )
                if expanded:
                    visit(node.children, path, depth + 1)

        visit(self.roots, (), 0)
        return rows
