#
# Copyright (c), 2025, Axius-SDC, Inc.
# All rights reserved.
# This file is distributed under the terms of the MIT License.
#
"""
XSD validator backends. A backend builds schemas and validates documents,
reporting schema violations as :class:`ValidationError` instances.
"""
from abc import ABCMeta, abstractmethod
from pathlib import Path
from typing import Any, List

from lxml import etree

from sdcvalidator.utils.etree import get_xml_parser
from .errors import ValidationError


class XSDValidator(metaclass=ABCMeta):
    """
    Base class of validator backends. Backends raise exceptions only for
    operational failures (e.g. an invalid schema), never for the schema
    violations of the validated document.
    """
    name: str

    def __repr__(self) -> str:
        return '%s()' % self.__class__.__name__

    @abstractmethod
    def is_schema(self, obj: Any) -> bool:
        """Returns `True` if the argument is a schema built by the backend."""

    @abstractmethod
    def build_schema(self, source: Any) -> Any:
        """
        Builds a schema from a source.

        :param source: the schema location or the schema text (a string or bytes).
        """

    @abstractmethod
    def validate(self, document: etree._ElementTree, schema: Any) -> List[ValidationError]:
        """
        Validates an XML document.

        :param document: the lxml tree of the document.
        :param schema: a schema built by the backend.
        :return: the list of validation errors, empty if the document is valid.
        """


class LxmlSchemaValidator(XSDValidator):
    """A validator backend based on libxml2 (XSD 1.0), by the means of lxml."""
    name = 'lxml'

    def is_schema(self, obj: Any) -> bool:
        return isinstance(obj, etree.XMLSchema)

    def build_schema(self, source: Any) -> etree.XMLSchema:
        if isinstance(source, bytes):
            schema_doc = etree.ElementTree(etree.fromstring(source.lstrip(), get_xml_parser()))
        elif isinstance(source, str) and source.lstrip().startswith('<'):
            schema_doc = etree.ElementTree(etree.fromstring(
                source.lstrip().encode('utf-8'), get_xml_parser(encoding='utf-8')
            ))
        else:
            # no_network is not used, includes and imports can be remote resources
            schema_doc = etree.parse(str(source) if isinstance(source, Path) else source,
                                     etree.XMLParser(resolve_entities=False))
        return etree.XMLSchema(schema_doc)

    def validate(self, document: etree._ElementTree, schema: etree.XMLSchema) \
            -> List[ValidationError]:
        if schema.validate(document):
            return []

        return [
            ValidationError(
                message=entry.message,
                path=entry.path or None,
                line=entry.line or None,
                column=entry.column or None,
                kind=entry.type_name,
            )
            for entry in schema.error_log.filter_from_errors()
        ]
