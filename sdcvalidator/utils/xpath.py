#
# Copyright (c), 2025, Axius-SDC, Inc.
# All rights reserved.
# This file is distributed under the terms of the MIT License.
#
"""
Helpers for locating elements of XML instances with XPath expressions.

Error paths are the ones reported by the validator backends, e.g.
``/root/person[2]/age`` or ``/sdc4:dm-xxx/*[3]``.
"""
from typing import Any, Optional

from lxml import etree

from sdcvalidator.utils.logger import logger


def get_namespaces(root: etree._Element) -> dict[str, str]:
    """
    Returns a map from namespace prefixes to URIs, collected from the
    namespace declarations of all the elements of the tree. The first
    declaration of a prefix wins. The default namespace is not included
    because XPath 1.0 can't bind an empty prefix.
    """
    namespaces: dict[str, str] = {}
    for elem in root.iter(etree.Element):
        for prefix, uri in elem.nsmap.items():
            if prefix is not None and prefix not in namespaces:
                namespaces[prefix] = uri
    return namespaces


def split_path(path: str) -> list[str]:
    """
    Splits a location path in its steps. Slashes inside braces (Clark notation
    of expanded names), predicates and quoted literals are not separators.
    Empty steps are discarded.
    """
    steps: list[str] = []
    chunk: list[str] = []
    braces = brackets = 0
    quote = None

    for char in path:
        if quote is not None:
            if char == quote:
                quote = None
        elif char in '"\'' and brackets:
            quote = char
        elif char == '{':
            braces += 1
        elif char == '}':
            braces -= 1
        elif char == '[':
            brackets += 1
        elif char == ']':
            brackets -= 1
        elif char == '/' and not braces and not brackets:
            if chunk:
                steps.append(''.join(chunk))
                chunk.clear()
            continue
        chunk.append(char)

    if chunk:
        steps.append(''.join(chunk))
    return [s for s in steps if s.strip()]


def get_parent_path(path: str) -> str:
    """Returns the path of the parent element, `'/'` for root level paths."""
    steps = split_path(path)
    if len(steps) <= 1:
        return '/'
    return '/' + '/'.join(steps[:-1])


def select_nodes(expression: str,
                 context: Any,
                 namespaces: Optional[dict[str, str]] = None) -> list[etree._Element]:
    """
    Evaluates an XPath expression and returns the matching elements.

    :param expression: the XPath expression.
    :param context: an lxml tree or element.
    :param namespaces: an optional mapping from namespace prefix to URI.
    :return: a list of elements, empty if the expression fails or doesn't \
    select elements.
    """
    try:
        result = context.xpath(expression, namespaces=namespaces or {})
    except (etree.XPathError, TypeError, ValueError) as err:
        logger.warning("XPath evaluation failed for %r: %s", expression, err)
        return []

    if not isinstance(result, list):
        return []
    return [x for x in result if isinstance(x, etree._Element) and isinstance(x.tag, str)]


def select_single_node(expression: str,
                       context: Any,
                       namespaces: Optional[dict[str, str]] = None) -> Optional[etree._Element]:
    """Returns the first element selected by the XPath expression or `None`."""
    nodes = select_nodes(expression, context, namespaces)
    return nodes[0] if nodes else None


def get_element_path(elem: etree._Element) -> str:
    """
    Returns the absolute path of an element, with positions for elements
    that have siblings with the same name.
    """
    return elem.getroottree().getpath(elem)
