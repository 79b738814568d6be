import copy
import logging
import os

from lxml import etree

from wsdlsort.compare import sort_nodes
from wsdlsort.errors import ImportCountError
from wsdlsort.xmlns import NSMAP

logger = logging.getLogger(__name__)

FRAGMENT_ROOT = "root"


def add_postfix(file_name, postfix):
    """service.wsdl + "messages" -> service.messages.wsdl, in the same directory."""
    base, ext = os.path.splitext(file_name)
    return f"{base}.{postfix}{ext}"


def copy_with_namespaces(node):
    """
    Deep copy of node that declares every namespace in scope at node.

    copy.deepcopy only keeps the declarations the copied tags use, which
    loses prefixes such as tns: that appear in attribute values only.
    """
    node_copy = etree.Element(node.tag, attrib=dict(node.attrib), nsmap=node.nsmap)
    node_copy.text = node.text
    node_copy.extend(copy.deepcopy(child) for child in node)
    return node_copy


def build_fragment(nodes):
    """Wrap deep copies of nodes, in order, in a new document with a synthetic root."""
    root = etree.Element(FRAGMENT_ROOT)
    for node in nodes:
        root.append(copy_with_namespaces(node))

    if len(root) != len(nodes):
        raise ImportCountError(f"Fragment holds {len(root)} nodes, expected {len(nodes)}.")

    return etree.ElementTree(root)


def write_fragment(tree, output_file):
    tree.write(output_file, pretty_print=True, xml_declaration=True, encoding="UTF-8")
    logger.info(f"Fragment saved to: {output_file}")


def extract(start, query, output_file, compare, adjust=None, finalize=None, allow_empty=False):
    """
    Sort the nodes matched by query below start into a fragment file.

    Args:
        start: element (or tree) the XPath query is evaluated against.
        query (str): XPath using the wsdl/xs/soap/soap12 prefixes.
        output_file (str): path of the fragment to write.
        compare: comparator used to order the nodes.
        adjust: optional callable applied to each source node before sorting.
        finalize: optional callable applied to the fragment root before saving.
        allow_empty (bool): write a fragment even if nothing matched.

    Returns:
        str: the written path, or None when nothing matched and nothing was written.
    """
    nodes = start.xpath(query, namespaces=NSMAP)
    if not nodes and not allow_empty:
        logger.info(f"Nothing matches '{query}', skipping {output_file}")
        return None

    if adjust is not None:
        for node in nodes:
            adjust(node)

    ordered = sort_nodes(nodes, compare)
    logger.debug(f"Sorted {len(ordered)} nodes for {output_file}")

    fragment = build_fragment(ordered)
    if finalize is not None:
        finalize(fragment.getroot())

    write_fragment(fragment, output_file)
    return output_file
