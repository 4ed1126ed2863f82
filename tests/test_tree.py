import pytest

from mousebox.tree import Tree, TreeNode


def test_add_node_links_parent_and_returns_child():
    root = TreeNode("root")
    child = TreeNode("child")
    returned = root.add_node(child)
    assert returned is child
    assert child.parent is root
    assert root.child(0) is child


def test_children_keep_insertion_order():
    root = TreeNode(0)
    for value in ("a", "b", "c"):
        root.add_node(TreeNode(value))
    assert [n.data for n in root] == ["a", "b", "c"]
    assert len(root) == 3
    assert root.child(-1).data == "c"


def test_new_node_has_no_parent():
    node = TreeNode(5)
    assert node.parent is None
    assert node.data == 5
    assert len(node) == 0


def test_child_out_of_range():
    with pytest.raises(IndexError):
        TreeNode().child(0)


def test_nested_nodes():
    root = TreeNode("r")
    mid = root.add_node(TreeNode("m"))
    leaf = mid.add_node(TreeNode("l"))
    assert leaf.parent.parent is root
    assert root.child(0).child(0) is leaf


def test_tree_set_root():
    tree = Tree()
    assert tree.root is None
    node = tree.set_root("top")
    assert tree.root is node
    assert node.data == "top"
    assert node.parent is None


def test_tree_set_root_replaces():
    tree = Tree()
    first = tree.set_root(1)
    first.add_node(TreeNode(2))
    second = tree.set_root(3)
    assert tree.root is second
    assert len(second) == 0