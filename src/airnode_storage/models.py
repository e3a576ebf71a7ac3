"""Directory tree models for Airnode bucket content.

A bucket is a flat key namespace. The directory view is reconstructed from a
listing snapshot on every use and never persisted or kept in sync with the
store.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

KEY_DELIMITER = "/"


@dataclass(frozen=True)
class FileNode:
    """Terminal entry representing a stored object.

    Attributes:
        bucket_key: Full object key in the bucket.
    """

    bucket_key: str


@dataclass
class DirectoryNode:
    """Directory level inferred from common key prefixes.

    Attributes:
        bucket_key: Key prefix of this directory, ending in "/" ("" for root).
        children: Child entries by name.
    """

    bucket_key: str = ""
    children: dict[str, DirectoryNode | FileNode] = field(default_factory=dict)

    def subdirectory(self, name: str) -> DirectoryNode:
        """Return the child directory ``name``, creating it if needed."""
        child = self.children.get(name)
        if not isinstance(child, DirectoryNode):
            child = DirectoryNode(bucket_key=f"{self.bucket_key}{name}{KEY_DELIMITER}")
            self.children[name] = child
        return child

    def find(self, path: str) -> DirectoryNode | None:
        """Resolve a nested directory by its "/"-delimited path.

        Args:
            path: Path relative to this node, e.g. "0xA30C.../dev".

        Returns:
            The directory node, or None if the path does not lead to a directory.
        """
        node: DirectoryNode | FileNode = self
        for segment in path.split(KEY_DELIMITER):
            if not segment:
                continue
            if not isinstance(node, DirectoryNode):
                return None
            child = node.children.get(segment)
            if child is None:
                return None
            node = child
        return node if isinstance(node, DirectoryNode) else None

    def iter_file_keys(self) -> Iterator[str]:
        """Yield every terminal key below this node in deletion order.

        Siblings are walked in reverse listing order and each sub-directory is
        exhausted before the walk moves on to an earlier sibling.
        """
        for child in reversed(list(self.children.values())):
            if isinstance(child, DirectoryNode):
                yield from child.iter_file_keys()
            else:
                yield child.bucket_key


def build_directory_tree(keys: Iterable[str]) -> DirectoryNode:
    """Convert a flat listing of object keys into a directory tree.

    Every segment except the last becomes (or reuses) a directory level; the
    last segment becomes a FileNode pointing at the full key. A key ending in
    "/" is a directory marker and only creates directory levels.

    Args:
        keys: Object keys as listed from the bucket, in any order.

    Returns:
        Root DirectoryNode.
    """
    root = DirectoryNode()
    for key in keys:
        *directories, name = key.split(KEY_DELIMITER)
        node = root
        for directory in directories:
            node = node.subdirectory(directory)
        # An object shadowed by a same-named directory is dropped in either order
        if name and not isinstance(node.children.get(name), DirectoryNode):
            node.children[name] = FileNode(bucket_key=key)
    return root
