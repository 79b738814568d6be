import logging
import re

from lxml import etree

from wsdlsort.xmlns import NSMAP

logger = logging.getLogger(__name__)

# Generator-assigned namespace aliases: q1, q2, ... (order dependent).
ALIAS_PATTERN = re.compile(r"q+\d+")
RETAINED_ALIAS = "r"

QUARTER_PATTERN = re.compile(r"/20\d\d/Q\d")
QUARTER_PLACEHOLDER = "/20XX/QX"

RETAIN = "retain"
STRIP = "strip"
PREFIX_POLICIES = (RETAIN, STRIP)


def normalize_action(value):
    """Replace the first /20YY/QN release stamp in an action URI with /20XX/QX."""
    return QUARTER_PATTERN.sub(QUARTER_PLACEHOLDER, value, count=1)


def normalize_action_attributes(node):
    """Normalize every *Action attribute (e.g. wsaw:Action) on the children of node."""
    for child in node.iterchildren(tag=etree.Element):
        for key, value in child.attrib.items():
            if etree.QName(key).localname == "Action":
                child.set(key, normalize_action(value))


def normalize_soap_action(node):
    """Normalize the soapAction of a binding operation's soap or soap12 operation."""
    soap_operation = node.find("soap:operation", NSMAP)
    if soap_operation is None:
        soap_operation = node.find("soap12:operation", NSMAP)
    if soap_operation is None:
        return

    soap_action = soap_operation.get("soapAction")
    if soap_action is not None:
        soap_operation.set("soapAction", normalize_action(soap_action))


def split_alias(type_value):
    """
    Return the generated alias of a QName such as "q1:FooType", or None.

    Only the text before the first colon is considered, and it must be an
    alias in full ("tns:Foo" and "xq1:Foo" have no alias).
    """
    alias, sep, _ = type_value.partition(":")
    if sep and ALIAS_PATTERN.fullmatch(alias):
        return alias
    return None


def local_declarations(node):
    """Namespace declarations made on node itself rather than inherited."""
    parent = node.getparent()
    inherited = parent.nsmap if parent is not None else {}
    return {prefix: uri for prefix, uri in node.nsmap.items() if inherited.get(prefix) != uri}


def drop_declaration(node, prefix):
    """
    Remove the xmlns:<prefix> declaration from node.

    lxml cannot delete a namespace declaration in place, so the node is
    rebuilt without it and its children are moved over. Returns the
    replacement, which takes node's place in the tree.
    """
    nsmap = local_declarations(node)
    del nsmap[prefix]

    replacement = etree.Element(node.tag, attrib=dict(node.attrib), nsmap=nsmap)
    replacement.text = node.text
    replacement.tail = node.tail
    replacement.extend(list(node))
    node.getparent().replace(node, replacement)
    return replacement


def normalize_type_prefix(node, policy=RETAIN):
    """
    Remove the volatile alias from the type attribute of one xs:element.

    RETAIN: the local xmlns:<alias> declaration moves into a plain "r"
    attribute and the type becomes "r:<local part>".
    STRIP: the local declaration and the type attribute are removed.

    Returns the node, or its replacement when a declaration was dropped.
    """
    if policy not in PREFIX_POLICIES:
        raise ValueError(f"Unknown prefix policy '{policy}', expected one of {PREFIX_POLICIES}.")

    type_value = node.get("type")
    alias = split_alias(type_value) if type_value else None
    if alias is None:
        return node

    namespace = local_declarations(node).get(alias)
    if namespace is not None:
        node = drop_declaration(node, alias)

    if policy == STRIP:
        del node.attrib["type"]
        logger.debug(f"Stripped type '{type_value}' from element '{node.get('name')}'")
        return node

    if namespace is not None:
        node.set(RETAINED_ALIAS, namespace)
    node.set("type", RETAINED_ALIAS + type_value[len(alias):])
    logger.debug(f"Renamed type '{type_value}' to '{node.get('type')}'")
    return node


def normalize_type_prefixes(root, policy=RETAIN):
    """Apply normalize_type_prefix to every xs:element[@type] below root."""
    for node in root.xpath(".//xs:element[@type]", namespaces=NSMAP):
        normalize_type_prefix(node, policy)
