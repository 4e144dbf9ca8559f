import pytest

from spool_inventory.constants.error_codes import ErrorCode
from spool_inventory.core.exceptions import AppException, DuplicatePathError, LocationNotFoundError
from spool_inventory.services.inventory.location_tree_service import (
    add_location,
    count_nodes,
    find_node,
    is_within,
    list_paths,
    parent_of,
    rebase_path,
    remove_location,
    rename_location,
)


@pytest.fixture
def tree():
    tree = add_location([], "", "Shelf1")
    tree = add_location(tree, "Shelf1", "BoxA")
    tree = add_location(tree, "Shelf1/BoxA", "Bin1")
    tree = add_location(tree, "Shelf1", "BoxA2")
    return add_location(tree, "", "Drybox")


def test_paths_are_pre_order(tree):
    assert list_paths(tree) == [
        "Shelf1",
        "Shelf1/BoxA",
        "Shelf1/BoxA/Bin1",
        "Shelf1/BoxA2",
        "Drybox",
    ]
    assert count_nodes(tree) == 5


def test_every_path_joins_parent_and_name(tree):
    node = find_node(tree, "Shelf1/BoxA/Bin1")
    assert node.name == "Bin1"
    assert parent_of(node.path) == "Shelf1/BoxA"
    assert parent_of("Shelf1") == ""


def test_add_duplicate_rejected_and_tree_unchanged(tree):
    before = list_paths(tree)

    with pytest.raises(DuplicatePathError) as exc_info:
        add_location(tree, "Shelf1", "BoxA")

    assert exc_info.value.error_code == ErrorCode.LOCATION_PATH_EXISTS
    assert list_paths(tree) == before


def test_add_under_missing_parent(tree):
    with pytest.raises(LocationNotFoundError):
        add_location(tree, "Nowhere", "Bin")


@pytest.mark.parametrize("name", ["", "   ", "a/b"])
def test_add_rejects_bad_names(tree, name):
    with pytest.raises(AppException) as exc_info:
        add_location(tree, "Shelf1", name)
    assert exc_info.value.error_code == ErrorCode.LOCATION_NAME_INVALID


def test_add_leaves_input_untouched(tree):
    updated = add_location(tree, "Shelf1/BoxA", "Bin2")

    assert "Shelf1/BoxA/Bin2" in list_paths(updated)
    assert "Shelf1/BoxA/Bin2" not in list_paths(tree)


def test_rename_rewrites_descendants_on_segment_boundary(tree):
    renamed = rename_location(tree, "Shelf1/BoxA", "BoxB")

    assert list_paths(renamed) == [
        "Shelf1",
        "Shelf1/BoxB",
        "Shelf1/BoxB/Bin1",
        "Shelf1/BoxA2",
        "Drybox",
    ]
    assert find_node(renamed, "Shelf1/BoxB").name == "BoxB"
    assert find_node(tree, "Shelf1/BoxA") is not None


def test_rename_onto_existing_sibling_rejected(tree):
    with pytest.raises(DuplicatePathError):
        rename_location(tree, "Shelf1/BoxA", "BoxA2")

    assert list_paths(tree)[1] == "Shelf1/BoxA"


def test_rename_to_same_name_is_a_no_op(tree):
    assert list_paths(rename_location(tree, "Shelf1", "Shelf1")) == list_paths(tree)


def test_rename_missing_location(tree):
    with pytest.raises(LocationNotFoundError):
        rename_location(tree, "Shelf9", "Shelf10")


def test_remove_returns_subtree_paths(tree):
    pruned, removed = remove_location(tree, "Shelf1/BoxA")

    assert removed == ["Shelf1/BoxA", "Shelf1/BoxA/Bin1"]
    assert list_paths(pruned) == ["Shelf1", "Shelf1/BoxA2", "Drybox"]
    assert count_nodes(tree) == 5


def test_remove_missing_location(tree):
    with pytest.raises(LocationNotFoundError):
        remove_location(tree, "Shelf1/BoxZ")


@pytest.mark.parametrize(
    "path, ancestor, expected",
    [
        ("Shelf1/BoxA", "Shelf1/BoxA", True),
        ("Shelf1/BoxA/Bin1", "Shelf1/BoxA", True),
        ("Shelf1/BoxA2", "Shelf1/BoxA", False),
        ("Shelf1", "Shelf1/BoxA", False),
        ("", "Shelf1", False),
    ],
)
def test_is_within(path, ancestor, expected):
    assert is_within(path, ancestor) is expected


def test_rebase_path():
    assert rebase_path("Shelf1/BoxA/Bin1", "Shelf1/BoxA", "Shelf1/BoxB") == "Shelf1/BoxB/Bin1"
    assert rebase_path("Shelf1/BoxA2", "Shelf1/BoxA", "Shelf1/BoxB") == "Shelf1/BoxA2"


def test_removed_paths_only_return_when_re_added(tree):
    pruned, removed = remove_location(tree, "Shelf1/BoxA")

    with_sibling = add_location(pruned, "Shelf1", "BoxC")
    assert not set(removed) & set(list_paths(with_sibling))

    re_added = add_location(with_sibling, "Shelf1", "BoxA")
    paths = list_paths(re_added)
    assert "Shelf1/BoxA" in paths
    assert "Shelf1/BoxA/Bin1" not in paths
    assert find_node(re_added, "Shelf1/BoxA").children == []
