import functools

from lxml import etree

from wsdlsort.errors import SortKeyCollisionError

# Schema declarations are grouped by kind before they are alphabetized.
WEIGHTS = {"import": 1, "element": 2, "simpleType": 3, "complexType": 4}
DEFAULT_WEIGHT = 10


def local_name(node):
    """Local part of the node's tag, or "" for comments and processing instructions."""
    if not isinstance(node.tag, str):
        return ""
    return etree.QName(node).localname


def _cmp(a, b):
    return (a > b) - (a < b)


def node_weight(node):
    return WEIGHTS.get(local_name(node), DEFAULT_WEIGHT)


def schema_key(node):
    """
    Sort key of a schema child: its weight, then the namespace of an
    <xs:import> or the name of anything else. Missing attributes sort as "".
    """
    attribute = "namespace" if local_name(node) == "import" else "name"
    return node_weight(node), node.get(attribute, "")


def name_key(node):
    return node.get("name", "")


def compare_schema_nodes(a, b):
    """Order schema children by weight, then by key attribute (ordinal)."""
    return _cmp(schema_key(a), schema_key(b))


def compare_by_name(a, b):
    """Order messages and operations by their name attribute (ordinal)."""
    return _cmp(name_key(a), name_key(b))


def describe(node):
    name = node.get("name")
    if name is None:
        name = node.get("namespace", "")
    return f"<{local_name(node)} '{name}'> (line {node.sourceline})"


def sort_nodes(nodes, compare):
    """
    Stable sort of nodes with compare, followed by a uniqueness check.

    Raises SortKeyCollisionError when two nodes compare equal, since one
    of them would otherwise be indistinguishable in the sorted output.
    """
    ordered = sorted(nodes, key=functools.cmp_to_key(compare))
    for previous, current in zip(ordered, ordered[1:]):
        if compare(previous, current) == 0:
            raise SortKeyCollisionError(
                f"Nodes {describe(previous)} and {describe(current)} share the same sort key."
            )
    return ordered
