#
# Copyright (c), 2025, Axius-SDC, Inc.
# Copyright (c), 2016-2024, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
"""
Parsing, cloning and serialization of XML instance documents.

All the documents handled by the package are lxml trees, that keep namespace
declarations, comments and parent links that the SDC4 recovery needs.
"""
import copy
from pathlib import Path
from typing import Any, Union
from xml.etree import ElementTree

from lxml import etree

from sdcvalidator.exceptions import SDCValidatorTypeError

XMLSourceType = Union[str, bytes, Path, Any]


def is_etree_element(obj: object) -> bool:
    """A validator for ElementTree elements."""
    return hasattr(obj, 'append') and hasattr(obj, 'tag') and hasattr(obj, 'attrib')


def is_etree_document(obj: object) -> bool:
    """A validator for ElementTree objects."""
    return hasattr(obj, 'getroot') and hasattr(obj, 'parse') and hasattr(obj, 'iter')


def is_lxml_element(obj: object) -> bool:
    """A validator for lxml elements."""
    return is_etree_element(obj) and hasattr(obj, 'getparent') \
        and hasattr(obj, 'nsmap') and hasattr(obj, 'xpath')


def is_lxml_document(obj: object) -> bool:
    return is_etree_document(obj) and hasattr(obj, 'xpath') and hasattr(obj, 'xslt')


def get_xml_parser(**kwargs: Any) -> etree.XMLParser:
    """Returns an XML parser that doesn't resolve entities or access the network."""
    kwargs.setdefault('resolve_entities', False)
    kwargs.setdefault('no_network', True)
    return etree.XMLParser(**kwargs)


def parse_xml(source: XMLSourceType) -> etree._ElementTree:
    """
    Parse an XML instance from a source and returns an lxml ElementTree.

    :param source: a file path, a string containing XML data, bytes, an lxml \
    element or tree, or an ElementTree element or tree of the standard library.
    :return: an lxml ElementTree. An lxml tree is returned as is, an lxml \
    root element returns its tree.
    """
    if is_lxml_document(source):
        return source
    elif is_lxml_element(source):
        if source.getparent() is None:
            return source.getroottree()
        root = copy.deepcopy(source)
        root.tail = None
        return etree.ElementTree(root)
    elif is_etree_document(source):
        return etree.ElementTree(etree.fromstring(
            ElementTree.tostring(source.getroot()), get_xml_parser()
        ))
    elif is_etree_element(source):
        return etree.ElementTree(etree.fromstring(
            ElementTree.tostring(source), get_xml_parser()
        ))
    elif isinstance(source, bytes):
        return etree.ElementTree(etree.fromstring(source.lstrip(), get_xml_parser()))
    elif isinstance(source, str) and source.lstrip().startswith('<'):
        # the text is already decoded, so force the parser to ignore the declared encoding
        parser = get_xml_parser(encoding='utf-8')
        return etree.ElementTree(etree.fromstring(source.lstrip().encode('utf-8'), parser))
    elif isinstance(source, (str, Path)):
        return etree.parse(str(source), get_xml_parser())

    raise SDCValidatorTypeError(f"Unsupported XML source type: {type(source)!r}")


def clone_document(tree: etree._ElementTree) -> etree._ElementTree:
    """Returns a deep copy of an lxml tree, including top-level comments and PIs."""
    return copy.deepcopy(tree)


def etree_tobytes(tree: etree._ElementTree,
                  encoding: str = 'UTF-8',
                  xml_declaration: bool = True,
                  pretty_print: bool = True) -> bytes:
    if pretty_print:
        tree = copy.deepcopy(tree)
        etree.indent(tree, space='  ')
    return etree.tostring(tree, encoding=encoding, xml_declaration=xml_declaration)


def serialize_xml(tree: etree._ElementTree,
                  encoding: str = 'UTF-8',
                  xml_declaration: bool = True,
                  pretty_print: bool = True) -> str:
    """
    Serialize an XML tree to a string. The tree is not modified by the
    pretty-printing, that is applied to a copy.

    :param tree: the lxml tree to serialize.
    :param encoding: the encoding written in the XML declaration.
    :param xml_declaration: if `True` starts the output with an XML declaration.
    :param pretty_print: if `True` reindents the output with two spaces.
    """
    data = etree_tobytes(tree, encoding, xml_declaration, pretty_print)
    return data.decode(encoding)


def write_xml(tree: etree._ElementTree,
              output_path: Union[str, Path],
              encoding: str = 'UTF-8',
              xml_declaration: bool = True,
              pretty_print: bool = True) -> None:
    """Serialize an XML tree and write it to a file."""
    data = etree_tobytes(tree, encoding, xml_declaration, pretty_print)
    with open(str(output_path), 'wb') as fp:
        fp.write(data)
