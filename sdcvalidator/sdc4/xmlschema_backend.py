#
# Copyright (c), 2025, Axius-SDC, Inc.
# All rights reserved.
# This file is distributed under the terms of the MIT License.
#
"""
The default validator backend, based on the xmlschema library, that supports XSD 1.1.
"""
from pathlib import Path
from typing import Any, List, Optional

import xmlschema
from lxml import etree

from sdcvalidator.exceptions import SDCValidatorValueError
from .backends import XSDValidator
from .errors import ValidationError

XSD_VERSIONS = {
    '1.0': xmlschema.XMLSchema10,
    '1.1': xmlschema.XMLSchema11,
}


class XMLSchemaValidator(XSDValidator):
    """
    A validator backend based on xmlschema.

    :param xsd_version: the XSD version of the schemas, can be '1.0' or '1.1'.
    """
    def __init__(self, xsd_version: str = '1.1') -> None:
        if xsd_version not in XSD_VERSIONS:
            raise SDCValidatorValueError(
                f"wrong XSD version {xsd_version!r}, must be '1.0' or '1.1'"
            )
        self.xsd_version = xsd_version
        self.schema_class = XSD_VERSIONS[xsd_version]

    def __repr__(self) -> str:
        return '%s(xsd_version=%r)' % (self.__class__.__name__, self.xsd_version)

    @property
    def name(self) -> str:  # type: ignore[override]
        return f'xmlschema-{self.xsd_version}'

    def is_schema(self, obj: Any) -> bool:
        return isinstance(obj, xmlschema.XMLSchemaBase)

    def build_schema(self, source: Any) -> xmlschema.XMLSchemaBase:
        if isinstance(source, bytes):
            source = source.decode('utf-8')
        elif isinstance(source, Path):
            source = str(source)
        return self.schema_class(source)

    def validate(self, document: etree._ElementTree, schema: xmlschema.XMLSchemaBase) \
            -> List[ValidationError]:
        return [
            ValidationError(
                message=err.reason or err.message,
                path=self.get_error_path(document, err),
                line=err.sourceline,
                kind=err.__class__.__name__,
            )
            for err in schema.iter_errors(document)
        ]

    @staticmethod
    def get_error_path(document: etree._ElementTree, error: Any) -> Optional[str]:
        """
        Returns the path of the element of the error in the document, with
        the same syntax of the paths reported by libxml2. For an unexpected
        child the path is the one of the child element.
        """
        elem = getattr(error, 'invalid_child', None)
        if elem is None:
            elem = error.elem
        if elem is not None:
            try:
                return document.getpath(elem)
            except (TypeError, ValueError):
                pass  # not an element of the document, use the path of the error
        return error.path
