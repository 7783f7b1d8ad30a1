import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

logger = logging.getLogger(__name__)


class NodeKind(StrEnum):
    FILE = "file"
    DIRECTORY = "directory"


@dataclass
class FileTreeNode:
    name: str
    path: str
    kind: NodeKind
    children: list["FileTreeNode"] = field(default_factory=list)
    payload: Any = None
    # name -> directory child, kept alongside children so lookups stay O(1)
    _dirs: dict[str, "FileTreeNode"] = field(default_factory=dict, repr=False, compare=False)

    @property
    def is_dir(self) -> bool:
        return self.kind == NodeKind.DIRECTORY

    def directory(self, name: str) -> "FileTreeNode":
        """Return the child directory ``name``, creating it on first use."""
        node = self._dirs.get(name)
        if node is None:
            path = f"{self.path}/{name}" if self.path else name
            node = FileTreeNode(name=name, path=path, kind=NodeKind.DIRECTORY)
            self._dirs[name] = node
            self.children.append(node)
        return node

    def add_file(self, name: str, path: str, payload: Any) -> "FileTreeNode":
        leaf = FileTreeNode(name=name, path=path, kind=NodeKind.FILE, payload=payload)
        self.children.append(leaf)
        return leaf

    def walk(self) -> Iterator["FileTreeNode"]:
        """Yield this node and every descendant, depth-first, in child order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def find(self, path: str) -> "FileTreeNode | None":
        for node in self.walk():
            if node.path == path:
                return node
        return None


def _split_entry(entry: Any) -> tuple[str, Any]:
    if isinstance(entry, tuple):
        path, payload = entry
        return path, payload
    return entry.path, entry


def build_tree(entries: Iterable[Any]) -> FileTreeNode:
    """Fold flat ``a/b/c.txt`` style paths into a directory tree.

    Entries are ``(path, payload)`` tuples or objects with a ``path``
    attribute, in which case the object itself is the payload. Children keep
    first-seen order at every level. Files are never merged, so the same
    path given twice yields two leaves.
    """
    root = FileTreeNode(name="root", path="", kind=NodeKind.DIRECTORY)
    for entry in entries:
        path, payload = _split_entry(entry)
        parts = [p for p in path.split("/") if p]
        if not parts:
            logger.warning("Skipping upload entry with empty path: %r", path)
            continue
        node = root
        for part in parts[:-1]:
            node = node.directory(part)
        node.add_file(parts[-1], path, payload)
    return root


def display_root(root: FileTreeNode) -> FileTreeNode:
    """Collapse the synthetic wrapper when an upload is a single folder."""
    if len(root.children) == 1 and root.children[0].is_dir:
        return root.children[0]
    return root


def render_tree(node: FileTreeNode, level: int = 0) -> str:
    lines = []
    label = f"{node.name}/" if node.is_dir else node.name
    lines.append(f"{'  ' * level}{label}")
    for child in node.children:
        lines.append(render_tree(child, level + 1))
    return "\n".join(lines)
