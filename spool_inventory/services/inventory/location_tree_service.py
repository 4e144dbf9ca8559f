"""Storage location forest.

Every function takes the current forest and returns a rebuilt one; the input
is never modified, so a rejected operation leaves the caller's tree intact.
"""
from typing import Iterable, Iterator, List, Optional, Tuple

from spool_inventory.constants.inventory import PATH_SEPARATOR
from spool_inventory.constants.error_codes import ErrorCode
from spool_inventory.core.exceptions import (
    AppException,
    DuplicatePathError,
    LocationNotFoundError,
)
from spool_inventory.schemas.inventory.location_schemas import LocationNode


# =====================================================
# PATH HELPERS
# =====================================================
def join_path(parent_path: str, name: str) -> str:
    return f"{parent_path}{PATH_SEPARATOR}{name}" if parent_path else name


def parent_of(path: str) -> str:
    head, sep, _ = path.rpartition(PATH_SEPARATOR)
    return head if sep else ""


def is_within(path: str, ancestor: str) -> bool:
    """True for ``ancestor`` itself and anything below it, whole segments only."""
    if not path or not ancestor:
        return False
    return path == ancestor or path.startswith(ancestor + PATH_SEPARATOR)


def rebase_path(path: str, old_prefix: str, new_prefix: str) -> str:
    if not is_within(path, old_prefix):
        return path
    return new_prefix + path[len(old_prefix):]


def _validate_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned or PATH_SEPARATOR in cleaned:
        raise AppException(
            400,
            f"Location names must be non-empty and must not contain '{PATH_SEPARATOR}'",
            ErrorCode.LOCATION_NAME_INVALID,
            {"name": name},
        )
    return cleaned


# =====================================================
# READS
# =====================================================
def iter_nodes(tree: Iterable[LocationNode]) -> Iterator[LocationNode]:
    """Pre-order, siblings in insertion order."""
    for node in tree:
        yield node
        yield from iter_nodes(node.children)


def list_paths(tree: Iterable[LocationNode]) -> List[str]:
    return [node.path for node in iter_nodes(tree)]


def find_node(tree: Iterable[LocationNode], path: str) -> Optional[LocationNode]:
    for node in iter_nodes(tree):
        if node.path == path:
            return node
    return None


def count_nodes(tree: Iterable[LocationNode]) -> int:
    return sum(1 for _ in iter_nodes(tree))


# =====================================================
# ADD
# =====================================================
def add_location(
    tree: List[LocationNode],
    parent_path: str,
    name: str,
) -> List[LocationNode]:
    name = _validate_name(name)
    parent_path = parent_path or ""

    if parent_path and find_node(tree, parent_path) is None:
        raise LocationNotFoundError(parent_path)

    new_path = join_path(parent_path, name)
    if find_node(tree, new_path) is not None:
        raise DuplicatePathError(new_path)

    new_node = LocationNode(name=name, path=new_path, children=[])

    if not parent_path:
        return [_clone(node) for node in tree] + [new_node]

    def _insert(nodes: List[LocationNode]) -> List[LocationNode]:
        rebuilt = []
        for node in nodes:
            children = _insert(node.children)
            if node.path == parent_path:
                children = children + [new_node]
            rebuilt.append(node.model_copy(update={"children": children}))
        return rebuilt

    return _insert(tree)


# =====================================================
# RENAME
# =====================================================
def rename_location(
    tree: List[LocationNode],
    path: str,
    new_name: str,
) -> List[LocationNode]:
    new_name = _validate_name(new_name)

    if find_node(tree, path) is None:
        raise LocationNotFoundError(path)

    new_path = join_path(parent_of(path), new_name)
    if new_path == path:
        return [_clone(node) for node in tree]

    # Nothing can exist below new_path while new_path itself is free
    if find_node(tree, new_path) is not None:
        raise DuplicatePathError(new_path)

    def _rebuild(nodes: List[LocationNode]) -> List[LocationNode]:
        rebuilt = []
        for node in nodes:
            update = {"children": _rebuild(node.children)}
            if node.path == path:
                update["name"] = new_name
            if is_within(node.path, path):
                update["path"] = rebase_path(node.path, path, new_path)
            rebuilt.append(node.model_copy(update=update))
        return rebuilt

    return _rebuild(tree)


# =====================================================
# REMOVE
# =====================================================
def remove_location(
    tree: List[LocationNode],
    path: str,
) -> Tuple[List[LocationNode], List[str]]:
    target = find_node(tree, path)
    if target is None:
        raise LocationNotFoundError(path)

    removed = list_paths([target])

    def _prune(nodes: List[LocationNode]) -> List[LocationNode]:
        return [
            node.model_copy(update={"children": _prune(node.children)})
            for node in nodes
            if node.path != path
        ]

    return _prune(tree), removed


def _clone(node: LocationNode) -> LocationNode:
    return node.model_copy(deep=True)
