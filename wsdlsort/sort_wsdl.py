#!/usr/bin/env python3
"""
sort_wsdl.py

Split a WSDL into sorted, normalized fragments so that regenerated service
definitions can be diffed without noise from element order, q1/q2 namespace
aliases or release-stamped action URIs.

For service.wsdl the following files are written beside it:
    service.schema.wsdl       children of the service schema, by kind then name
    service.messages.wsdl     wsdl:message nodes, by name
    service.operations.wsdl   wsdl:portType/wsdl:operation nodes, by name
    service.<Binding>.wsdl    operations of each wsdl:binding, by name

Usage:
    python -m wsdlsort /path/to/service.wsdl

Run `python -m wsdlsort --help` for details.
"""

import argparse
import functools
import logging
import os
import sys

from lxml import etree

from wsdlsort.compare import compare_by_name, compare_schema_nodes
from wsdlsort.errors import SchemaNotFoundError, WsdlSortError
from wsdlsort.fragment import add_postfix, extract
from wsdlsort.normalize import (
    RETAIN,
    STRIP,
    normalize_action_attributes,
    normalize_soap_action,
    normalize_type_prefixes,
)
from wsdlsort.xmlns import NSMAP

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE_FILTER = "ilevelsolutions.com"
DEFAULT_BINDING_PREFIX = "CustomBinding_"
SECTION_POSTFIXES = ("schema", "messages", "operations")


def load_wsdl(file_name):
    if not os.path.isfile(file_name):
        raise FileNotFoundError(f"Input file '{file_name}' not found.")

    parser = etree.XMLParser(remove_blank_text=True)
    return etree.parse(file_name, parser)


def namespace_matcher(namespace_filter):
    """A substring filter becomes a "contains" predicate; a callable is used as is."""
    if callable(namespace_filter):
        return namespace_filter
    return lambda namespace: namespace_filter in namespace


def find_schema(tree, namespace_filter=DEFAULT_NAMESPACE_FILTER):
    """Return the single wsdl:types/xs:schema whose targetNamespace matches the filter."""
    matches = namespace_matcher(namespace_filter)
    schemas = [
        schema
        for schema in tree.xpath("/wsdl:definitions/wsdl:types/xs:schema", namespaces=NSMAP)
        if matches(schema.get("targetNamespace", ""))
    ]

    if not schemas:
        raise SchemaNotFoundError(f"No schema with a targetNamespace matching '{namespace_filter}' found.")
    if len(schemas) > 1:
        raise SchemaNotFoundError(
            f"{len(schemas)} schemas have a targetNamespace matching '{namespace_filter}', expected one."
        )
    return schemas[0]


def save_schema(tree, file_name, namespace_filter=DEFAULT_NAMESPACE_FILTER, prefix_policy=RETAIN):
    schema = find_schema(tree, namespace_filter)
    logger.info(f"Using schema {schema.get('targetNamespace')}")
    # Elements only: comments between declarations are not carried over.
    return extract(
        schema,
        "*",
        add_postfix(file_name, "schema"),
        compare_schema_nodes,
        finalize=functools.partial(normalize_type_prefixes, policy=prefix_policy),
        allow_empty=True,
    )


def save_messages(tree, file_name):
    return extract(tree, "/wsdl:definitions/wsdl:message", add_postfix(file_name, "messages"), compare_by_name)


def save_operations(tree, file_name):
    return extract(
        tree,
        "/wsdl:definitions/wsdl:portType/wsdl:operation",
        add_postfix(file_name, "operations"),
        compare_by_name,
        adjust=normalize_action_attributes,
    )


def binding_postfix(binding_name, binding_prefix=DEFAULT_BINDING_PREFIX):
    """CustomBinding_Invoicing -> Invoicing"""
    if binding_prefix and binding_name.startswith(binding_prefix):
        return binding_name[len(binding_prefix):]
    return binding_name


def save_bindings(tree, file_name, binding_prefix=DEFAULT_BINDING_PREFIX):
    written = []
    used_postfixes = set(SECTION_POSTFIXES)
    for binding in tree.xpath("/wsdl:definitions/wsdl:binding", namespaces=NSMAP):
        postfix = binding_postfix(binding.get("name", ""), binding_prefix)
        if not postfix:
            logger.warning(f"Skipping binding without a usable name (line {binding.sourceline})")
            continue
        if postfix in used_postfixes:
            raise WsdlSortError(
                f"Binding '{binding.get('name')}' (line {binding.sourceline}) would overwrite "
                f"the '{postfix}' fragment."
            )
        used_postfixes.add(postfix)

        output_file = extract(
            binding,
            "wsdl:operation",
            add_postfix(file_name, postfix),
            compare_by_name,
            adjust=normalize_soap_action,
        )
        if output_file:
            written.append(output_file)
    return written


def sort_wsdl(
    file_name,
    namespace_filter=DEFAULT_NAMESPACE_FILTER,
    prefix_policy=RETAIN,
    binding_prefix=DEFAULT_BINDING_PREFIX,
):
    """
    Write the sorted schema, messages, operations and binding fragments of a WSDL.

    Args:
        file_name (str): Path to the source WSDL.
        namespace_filter: Substring of (or predicate over) the targetNamespace
            of the schema to sort.
        prefix_policy (str): RETAIN or STRIP, see normalize_type_prefix.
        binding_prefix (str): Removed from binding names to build their postfix.

    Returns:
        list: Paths of the written fragments, in the order they were written.
    """
    tree = load_wsdl(file_name)

    written = [save_schema(tree, file_name, namespace_filter, prefix_policy)]
    for output_file in (save_messages(tree, file_name), save_operations(tree, file_name)):
        if output_file:
            written.append(output_file)
    written.extend(save_bindings(tree, file_name, binding_prefix))
    return written


def main(argv=None):
    parser = argparse.ArgumentParser(description="Split a WSDL into sorted, normalized fragments.")
    parser.add_argument("files", nargs="*", metavar="WSDL_FILE", help="Path to the WSDL file to sort.")
    parser.add_argument(
        "-n",
        "--namespace-filter",
        default=DEFAULT_NAMESPACE_FILTER,
        help=f"Text the targetNamespace of the schema to sort must contain (default: {DEFAULT_NAMESPACE_FILTER}).",
    )
    parser.add_argument(
        "-s",
        "--strip-types",
        action="store_true",
        help="Remove aliased type attributes instead of renaming their alias to 'r'.",
    )
    parser.add_argument(
        "-b",
        "--binding-prefix",
        default=DEFAULT_BINDING_PREFIX,
        help=f"Prefix removed from binding names in output file names (default: {DEFAULT_BINDING_PREFIX}).",
    )

    # Debug flags
    group = parser.add_mutually_exclusive_group()
    group.add_argument("-v", "--verbose", action="store_true", help="Enable verbose mode (debuglevel=1).")
    group.add_argument("-d", "--debug", action="store_true", help="Enable debug mode (debuglevel=2).")

    args, unknown = parser.parse_known_args(argv)

    if unknown or len(args.files) != 1:
        return 0

    # Set debug level
    level = logging.WARNING
    if args.verbose:
        level = logging.INFO
    elif args.debug:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    try:
        sort_wsdl(
            args.files[0],
            namespace_filter=args.namespace_filter,
            prefix_policy=STRIP if args.strip_types else RETAIN,
            binding_prefix=args.binding_prefix,
        )
    except (WsdlSortError, OSError, etree.XMLSyntaxError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
