#
# Copyright (c), 2025, Axius-SDC, Inc.
# All rights reserved.
# This file is distributed under the terms of the MIT License.
#
"""
Namespace handling of SDC4 ExceptionalValue elements.
"""
from typing import Any

from lxml import etree

from sdcvalidator.utils.logger import logger
from .constants import SDC4_NAMESPACE, DEFAULT_NAMESPACE_PREFIX, EXCEPTIONAL_VALUE_TAGS


def _get_root(tree: Any) -> etree._Element:
    return tree.getroot() if hasattr(tree, 'getroot') else tree


def ensure_sdc4_namespace(tree: Any, prefix: str = DEFAULT_NAMESPACE_PREFIX) -> str:
    """
    Ensure the SDC4 namespace is declared on the root element. Calling it
    again with the same prefix doesn't add other declarations. If the prefix
    is already bound to another namespace on the root element, a prefix of
    the root already bound to the SDC4 namespace is used, otherwise a new
    prefix is declared, adding a numeric suffix to the requested one.

    :param tree: an lxml tree or its root element.
    :param prefix: the namespace prefix (default: 'sdc4').
    :return: the prefix used.
    """
    root = _get_root(tree)
    uri = root.nsmap.get(prefix)
    if uri == SDC4_NAMESPACE:
        return prefix

    # Keep all the existing declarations, also the ones used only in QName values
    prefixes: set[str] = set()
    for elem in root.iter(etree.Element):
        prefixes.update(p for p in elem.nsmap if p is not None)

    if uri is not None:
        for other_prefix, other_uri in root.nsmap.items():
            if other_prefix is not None and other_uri == SDC4_NAMESPACE:
                return other_prefix

        k = 1
        while f'{prefix}_{k}' in prefixes:
            k += 1
        logger.warning("Prefix %r is already bound to namespace %r, the SDC4 "
                       "namespace is declared with prefix %r", prefix, uri, f'{prefix}_{k}')
        prefix = f'{prefix}_{k}'

    prefixes.add(prefix)
    etree.cleanup_namespaces(
        root, top_nsmap={prefix: SDC4_NAMESPACE}, keep_ns_prefixes=sorted(prefixes)
    )
    return prefix


def create_namespaced_element(tag_name: str,
                              prefix: str = DEFAULT_NAMESPACE_PREFIX) -> etree._Element:
    """
    Create an element in the SDC4 namespace. The namespace declaration is
    dropped when the element is inserted under an element that already
    declares the SDC4 namespace.
    """
    return etree.Element(f'{{{SDC4_NAMESPACE}}}{tag_name}', nsmap={prefix: SDC4_NAMESPACE})


def is_exceptional_value_element(elem: Any) -> bool:
    """Check if an element is an ExceptionalValue element."""
    tag = getattr(elem, 'tag', None)
    return isinstance(tag, str) and tag in EXCEPTIONAL_VALUE_TAGS


def remove_exceptional_values(tree: Any) -> int:
    """
    Remove all ExceptionalValue elements from the document. A text following
    a removed element is preserved if it's not only whitespace.

    :param tree: an lxml tree or its root element.
    :return: the number of removed elements.
    """
    root = _get_root(tree)
    to_remove = [elem for elem in root.iter(etree.Element)
                 if is_exceptional_value_element(elem)]

    count = 0
    for elem in to_remove:
        parent = elem.getparent()
        if parent is None:
            continue

        tail = elem.tail
        if tail and tail.strip():
            previous = elem.getprevious()
            if previous is not None:
                previous.tail = (previous.tail or '') + tail
            else:
                parent.text = (parent.text or '') + tail

        parent.remove(elem)
        count += 1

    if count:
        logger.debug("Removed %d ExceptionalValue element(s)", count)
    return count
