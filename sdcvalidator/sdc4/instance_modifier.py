#
# Copyright (c), 2025, Axius-SDC, Inc.
# All rights reserved.
# This file is distributed under the terms of the MIT License.
#
"""
Modifies XML instance documents to insert SDC4 ExceptionalValue elements.
"""

from typing import Any, Dict, Iterable, List, Optional, Union

from lxml import etree

from sdcvalidator.utils.logger import logger
from sdcvalidator.utils.xpath import get_namespaces, get_parent_path, \
    select_single_node, get_element_path
from .constants import SDC4_NAMESPACE, DEFAULT_NAMESPACE_PREFIX, EV_NAME_TAG, \
    ExceptionalValueType
from .errors import ErrorLocation
from .namespaces import create_namespaced_element, ensure_sdc4_namespace, \
    remove_exceptional_values


def _get_document(tree: Any) -> etree._ElementTree:
    return tree if hasattr(tree, 'getroot') else tree.getroottree()


class InstanceModifier:
    """
    Modifies XML instance documents by inserting ExceptionalValue elements
    at validation error locations.

    Uses the SDC4 "quarantine-and-tag" pattern where invalid values are
    preserved and flagged with ExceptionalValue elements. An ExceptionalValue
    is inserted as the first child of the parent of the element where the
    error occurred, so more errors under the same parent appear in reverse
    order. The position is not checked against the schema content model.

    The markers are bound to the SDC4 namespace. When the SDC4 namespace is
    also the default namespace in scope, lxml reuses that declaration and the
    markers are serialized without prefix, with the same expanded names.
    """

    def __init__(self, namespace_prefix: str = DEFAULT_NAMESPACE_PREFIX):
        """
        Initialize the instance modifier.

        :param namespace_prefix: The XML namespace prefix to use for SDC4 elements \
        (default: 'sdc4').
        """
        self.namespace_prefix = namespace_prefix
        self.sdc4_ns = SDC4_NAMESPACE

    def inject_exceptional_values(self, tree: Any, errors: Iterable[ErrorLocation]) -> Any:
        """
        Inject ExceptionalValue elements for all error locations. Locations
        whose parent element can't be found are skipped.

        :param tree: the lxml tree of the XML document, or its root element.
        :param errors: the error locations.
        :return: the same tree, modified in place.
        """
        self._inject(_get_document(tree), errors)
        return tree

    def insert_exceptional_value(self,
                                 tree: Any,
                                 xpath: str,
                                 ev_type: Union[ExceptionalValueType, str],
                                 reason: Optional[str] = None) -> bool:
        """
        Insert an ExceptionalValue element for an error at the specified XPath location.

        :param tree: the lxml tree of the XML document, or its root element.
        :param xpath: XPath to the element where the error occurred.
        :param ev_type: The ExceptionalValueType to insert, or its code.
        :param reason: Optional additional reason text.
        :return: True if insertion was successful, False otherwise.
        """
        location = ErrorLocation(xpath, ev_type, reason or '')  # type: ignore[arg-type]
        return self._inject(_get_document(tree), [location]) == 1

    def _inject(self, document: etree._ElementTree, errors: Iterable[ErrorLocation]) -> int:
        prefix = ensure_sdc4_namespace(document, self.namespace_prefix)

        errors_by_parent = self.group_errors_by_parent(errors)
        namespaces = get_namespaces(document.getroot())

        # Resolve all the parents before inserting: an insertion changes
        # the positions used by the paths of the following elements.
        targets = []
        for parent_path, parent_errors in errors_by_parent.items():
            parent = self._find_element(document, parent_path, namespaces)
            if parent is None:
                logger.warning("Could not find parent element at path: %s", parent_path)
            else:
                targets.append((parent, parent_errors))

        return sum(self._inject_at_location(parent, parent_errors, prefix)
                   for parent, parent_errors in targets)

    @staticmethod
    def group_errors_by_parent(errors: Iterable[ErrorLocation]) -> Dict[str, List[ErrorLocation]]:
        """
        Group errors by their parent element path.

        :param errors: The error locations.
        :return: A dictionary from parent paths to error locations, in order \
        of first appearance.
        """
        groups: Dict[str, List[ErrorLocation]] = {}
        for error in errors:
            groups.setdefault(get_parent_path(error.xpath), []).append(error)
        return groups

    @staticmethod
    def _find_element(document: etree._ElementTree,
                      xpath: str,
                      namespaces: Dict[str, str]) -> Optional[etree._Element]:
        if xpath in ('/', ''):
            return document.getroot()
        return select_single_node(xpath, document, namespaces)

    def _inject_at_location(self, parent: etree._Element,
                            errors: List[ErrorLocation],
                            prefix: str) -> int:
        count = 0
        for error in errors:
            try:
                ev_element = self.create_exceptional_value_element(
                    error.ev_type, error.reason, prefix
                )
                self._insert_element(parent, ev_element)
            except (AttributeError, TypeError, ValueError) as err:
                logger.warning("Failed to inject ExceptionalValue at %s: %s", error.xpath, err)
            else:
                count += 1
                logger.debug("Inserted %s into %s", ev_element.tag, get_element_path(parent))
        return count

    def create_exceptional_value_element(self,
                                         ev_type: Union[ExceptionalValueType, str],
                                         reason: Optional[str] = None,
                                         prefix: Optional[str] = None) -> etree._Element:
        """
        Create an ExceptionalValue element.

        :param ev_type: The ExceptionalValueType, or its code.
        :param reason: Optional additional reason text, added as a comment.
        :param prefix: the namespace prefix, the one of the instance modifier by default.
        :return: The created element.
        """
        if isinstance(ev_type, str):
            ev_type = ExceptionalValueType.from_code(ev_type)

        ev_elem = create_namespaced_element(ev_type.code, prefix or self.namespace_prefix)
        ev_name_elem = etree.SubElement(ev_elem, f"{{{self.sdc4_ns}}}{EV_NAME_TAG}")
        ev_name_elem.text = ev_type.ev_name

        if reason:
            ev_elem.append(etree.Comment(f" Validation error: {self._comment_text(reason)} "))

        return ev_elem

    @staticmethod
    def _comment_text(text: str) -> str:
        # '--' is not allowed within XML comments
        while '--' in text:
            text = text.replace('--', '- -')
        return text

    @staticmethod
    def _insert_element(parent: etree._Element, new_element: etree._Element):
        """Insert an element before the first child node of the parent."""
        text = parent.text
        if text and text.strip():
            parent.text = None
            new_element.tail = text
        elif len(parent):
            # Keep the indentation of the following child
            new_element.tail = text
        parent.insert(0, new_element)

    def remove_existing_exceptional_values(self, tree: Any) -> int:
        """
        Remove any existing ExceptionalValue elements from the document.

        :param tree: the lxml tree of the XML document, or its root element.
        :return: the number of removed elements.
        """
        return remove_exceptional_values(tree)
