import pytest

from fanchart.config import FilterMode
from fanchart.errors import ConfigurationOutOfRange
from fanchart.tree import Node, TreeBuilder

from builders import family, person


def names(node):
    return [child.data.xref for child in node.children]


def test_build_assigns_generations_and_ids(small_family):
    tree = TreeBuilder(6).build(small_family)

    assert tree.generation == 1
    assert names(tree) == ["I3", "I4"]
    assert names(tree.children[0]) == ["I5"]
    assert tree.children[0].children[0].generation == 3
    assert [node.id for node in tree.walk()] == [1, 2, 3, 4]


def test_ids_restart_with_every_build(small_family):
    builder = TreeBuilder(6)

    first = [node.id for node in builder.build(small_family).walk()]
    second = [node.id for node in builder.build(small_family).walk()]

    assert first == second == [1, 2, 3, 4]


def test_generation_cap(small_family):
    tree = TreeBuilder(2).build(small_family)

    assert names(tree) == ["I3", "I4"]
    assert all(child.is_leaf for child in tree.children)


def test_missing_root_builds_nothing():
    assert TreeBuilder(6).build(None) is None


def test_only_male_descendants_stop_at_daughters():
    root = person("R", "M")
    son = person("S", "M")
    daughter = person("D", "F")
    grandchild = person("G", "M")
    family([root], [son])
    family([son], [daughter])
    family([daughter], [grandchild])

    tree = TreeBuilder(6, FilterMode.ONLY_MALE).build(root)
    third = tree.children[0].children[0]

    assert third.data.xref == "D"
    assert third.generation == 3
    assert third.is_leaf


def test_only_female_descendants_stop_at_sons():
    root = person("R", "F")
    son = person("S", "M")
    grandchild = person("G", "F")
    family([root], [son])
    family([son], [grandchild])

    tree = TreeBuilder(6, FilterMode.ONLY_FEMALE).build(root)

    assert names(tree) == ["S"]
    assert tree.children[0].is_leaf


def test_root_is_never_filtered():
    root = person("R", "F")
    family([root], [person("C", "M")])

    tree = TreeBuilder(6, FilterMode.ONLY_MALE).build(root)

    assert names(tree) == ["C"]


def test_only_male_plus_keeps_children_with_her_family_name():
    root = person("R", "M", "John Smith")
    jane = person("J", "F", "Jane Smith")
    bob = person("B", "M", "Bob Jones")
    amy = person("A", "F", "Amy Smith")
    family([root], [jane])
    family([jane], [bob, amy])

    tree = TreeBuilder(6, FilterMode.ONLY_MALE_PLUS).build(root)

    assert names(tree.children[0]) == ["A"]


def test_unknown_sex_never_stops_expansion():
    root = person("R", "M")
    child = person("C", "U")
    family([root], [child])
    family([child], [person("G", "M")])

    for mode in (FilterMode.ONLY_MALE, FilterMode.ONLY_FEMALE):
        tree = TreeBuilder(6, mode).build(root)
        assert names(tree.children[0]) == ["G"]


def test_direct_line_flags_are_propagated_upwards(small_family):
    tree = TreeBuilder(6, direct_lines=("I5", "I4")).build(small_family)
    son, daughter = tree.children
    grandson = son.children[0]

    assert tree.is_direct_line1 and son.is_direct_line1 and grandson.is_direct_line1
    assert not daughter.is_direct_line1

    assert tree.is_direct_line2 and daughter.is_direct_line2
    assert not son.is_direct_line2 and not grandson.is_direct_line2

    for node in tree.walk():
        below = list(node.walk())
        assert node.is_direct_line1 == any(n.data.xref == "I5" for n in below)
        assert node.is_direct_line2 == any(n.data.xref == "I4" for n in below)


def test_json_shape(small_family):
    tree = TreeBuilder(6, direct_lines=("I5", None)).build(small_family)
    datum = tree.to_json()

    assert datum["data"]["xref"] == "I1"
    assert datum["data"]["timespan"] == "1850-1920"
    assert datum["data"]["isDirectLine1"] is True
    assert datum["data"]["isDirectLine2"] is False
    assert "children" not in datum["children"][1]

    restored = Node.from_json(datum)

    assert restored.data == tree.data
    assert [node.data.xref for node in restored.walk()] == ["I1", "I3", "I5", "I4"]
    assert restored.children[0].is_direct_line1


@pytest.mark.parametrize("max_generations", [1, 31, None])
def test_generation_cap_out_of_range(max_generations):
    with pytest.raises(ConfigurationOutOfRange):
        TreeBuilder(max_generations)
