#
# Copyright (c), 2025, Axius-SDC, Inc.
# All rights reserved.
# This file is distributed under the terms of the MIT License.
#
"""
SDC4-aware validation with ExceptionalValue recovery.
"""
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

from lxml import etree

from sdcvalidator.exceptions import SDCValidationFailed, SDCValidatorValueError
from sdcvalidator.utils.etree import XMLSourceType, parse_xml, clone_document, write_xml
from sdcvalidator.utils.logger import logger, logged, dump_data
from .backends import XSDValidator
from .xmlschema_backend import XMLSchemaValidator
from .constants import DEFAULT_NAMESPACE_PREFIX, EXCEPTIONAL_VALUE_CODES
from .error_mapper import ErrorMapper
from .errors import ErrorLocation, ValidationError
from .instance_modifier import InstanceModifier
from .schema import SchemaCache, load_schema


class ValidationMode(Enum):
    """Validation modes of :class:`SDC4Validator`."""
    STRICT = 'strict'
    LAX = 'lax'
    SKIP = 'skip'


class SDC4Validator:
    """
    Validates XML instances against SDC4 data model schemas and inserts
    ExceptionalValue elements for validation errors.

    Uses the SDC4 "quarantine-and-tag" pattern where invalid values are
    preserved and flagged with ExceptionalValue elements for data quality
    tracking and auditing.

    :param schema: the XSD schema location, the schema text or a schema \
    instance already built by the validator backend.
    :param error_mapper: optional custom error mapper (default: uses \
    ErrorMapper with default rules).
    :param namespace_prefix: the XML namespace prefix to use for SDC4 \
    elements (default: 'sdc4').
    :param validation: validation mode, 'strict', 'lax' or 'skip' (default: 'lax'). \
    In 'strict' mode an invalid instance raises :class:`SDCValidationFailed`, \
    in 'skip' mode the instances are not validated.
    :param validator: the XSD validator backend, an :class:`XMLSchemaValidator` \
    instance for XSD 1.1 by default.
    :param schema_cache: the cache of loaded schemas, the process-wide cache \
    by default.
    """
    def __init__(self, schema: Any,
                 error_mapper: Optional[ErrorMapper] = None,
                 namespace_prefix: str = DEFAULT_NAMESPACE_PREFIX,
                 validation: Union[ValidationMode, str] = 'lax',
                 validator: Optional[XSDValidator] = None,
                 schema_cache: Optional[SchemaCache] = None) -> None:
        try:
            self._validation_mode = ValidationMode(validation)
        except ValueError:
            raise SDCValidatorValueError(
                f"validation mode can be 'strict', 'lax' or 'skip': {validation!r}"
            ) from None

        self.schema_source = schema
        self.error_mapper = error_mapper or ErrorMapper()
        self.instance_modifier = InstanceModifier(namespace_prefix=namespace_prefix)
        self.validator = validator or XMLSchemaValidator()
        self.schema_cache = schema_cache
        self._schema: Any = None

    def __repr__(self) -> str:
        return '%s(schema=%r, validation=%r)' % (
            self.__class__.__name__, self.schema_source, self._validation_mode.value
        )

    @property
    def validation_mode(self) -> ValidationMode:
        return self._validation_mode

    @property
    def schema(self) -> Any:
        """The schema instance, loaded on first access."""
        if self._schema is None:
            self._schema = load_schema(self.schema_source, self.validator, self.schema_cache)
        return self._schema

    def get_errors(self, document: etree._ElementTree) -> List[ValidationError]:
        """Validates a document, returning the list of validation errors."""
        return self.validator.validate(document, self.schema)

    @logged
    def validate_with_recovery(self,
                               xml_source: XMLSourceType,
                               remove_existing_ev: bool = True,
                               loglevel: Optional[Union[str, int]] = None) \
            -> etree._ElementTree:
        """
        Validate an XML instance and insert ExceptionalValue elements for errors.
        The source is not modified, the elements are inserted into a copy.

        :param xml_source: the XML instance to validate (a file path, the XML \
        text, bytes, an lxml tree or element, or an ElementTree tree or element).
        :param remove_existing_ev: if True, remove any existing ExceptionalValue \
        elements before processing.
        :param loglevel: for setting a different logging level for this call.
        :return: modified XML tree with ExceptionalValue elements inserted.
        """
        document = clone_document(parse_xml(xml_source))

        if remove_existing_ev:
            self.instance_modifier.remove_existing_exceptional_values(document)

        if self._validation_mode is ValidationMode.SKIP:
            logger.debug("Validation skipped for %r", xml_source)
            return document

        errors = self.get_errors(document)
        if not errors:
            return document
        elif self._validation_mode is ValidationMode.STRICT:
            raise SDCValidationFailed(errors)

        logger.info("Found %d validation error(s)", len(errors))
        locations = [
            ErrorLocation(error.path or '/', self.error_mapper.map_error(error), error.message)
            for error in errors
        ]
        self.instance_modifier.inject_exceptional_values(document, locations)
        dump_data(document)
        return document

    def iter_errors_with_mapping(self, xml_source: XMLSourceType) -> Iterator[Dict[str, Any]]:
        """
        Iterate over validation errors with their mapped ExceptionalValue types.
        The instance is validated once, before yielding the first error.

        :param xml_source: the XML instance to validate.
        :return: an iterator of dictionaries containing the error details and \
        the mapped ExceptionalValue type.
        """
        if self._validation_mode is ValidationMode.SKIP:
            return

        for error in self.get_errors(parse_xml(xml_source)):
            summary: Dict[str, Any] = self.error_mapper.get_error_summary(error)
            if error.line is not None:
                summary['line'] = error.line
            if error.column is not None:
                summary['column'] = error.column
            yield summary

    def validate_and_report(self, xml_source: XMLSourceType) -> Dict[str, Any]:
        """
        Validate an XML instance and return a detailed report.

        :param xml_source: the XML instance to validate.
        :return: dictionary containing validation results and error summaries.
        """
        errors = list(self.iter_errors_with_mapping(xml_source))

        # Group errors by ExceptionalValue type
        ev_type_counts = {code: 0 for code in EXCEPTIONAL_VALUE_CODES}
        for error in errors:
            ev_type_counts[error['exceptional_value_type']] += 1

        return {
            'valid': not errors,
            'error_count': len(errors),
            'errors': errors,
            'exceptional_value_type_counts': ev_type_counts,
        }

    def save_recovered_xml(self,
                           output_path: Union[str, Path],
                           xml_source: XMLSourceType,
                           remove_existing_ev: bool = True,
                           encoding: str = 'UTF-8',
                           xml_declaration: bool = True,
                           pretty_print: bool = True) -> etree._ElementTree:
        """
        Validate an XML instance, insert ExceptionalValues, and save to file.

        :param output_path: path where the modified XML should be saved.
        :param xml_source: the XML instance to validate.
        :param remove_existing_ev: if True, remove any existing ExceptionalValue elements.
        :param encoding: XML encoding (default: 'UTF-8').
        :param xml_declaration: include XML declaration (default: True).
        :param pretty_print: reindent the saved XML (default: True).
        :return: the recovered XML tree.
        """
        recovered_tree = self.validate_with_recovery(xml_source, remove_existing_ev)
        write_xml(recovered_tree, output_path, encoding, xml_declaration, pretty_print)
        return recovered_tree


def validate_with_recovery(schema_path: Any,
                           xml_path: XMLSourceType,
                           output_path: Optional[Union[str, Path]] = None,
                           **kwargs: Any) -> etree._ElementTree:
    """
    Convenience function to validate an XML file and insert ExceptionalValues.

    :param schema_path: path to the XSD schema file.
    :param xml_path: path to the XML instance file.
    :param output_path: optional path to save the recovered XML (if None, doesn't save).
    :param kwargs: additional arguments to pass to SDC4Validator.
    :return: modified XML tree with ExceptionalValue elements inserted.
    """
    validator = SDC4Validator(schema_path, **kwargs)
    if output_path:
        return validator.save_recovered_xml(output_path, xml_path)
    return validator.validate_with_recovery(xml_path)


def is_valid(schema_path: Any, xml_path: XMLSourceType, **kwargs: Any) -> bool:
    """Returns `True` if the XML instance is valid against the schema."""
    return not SDC4Validator(schema_path, **kwargs).validate_and_report(xml_path)['error_count']


def iter_errors(schema_path: Any, xml_path: XMLSourceType, **kwargs: Any) \
        -> Iterator[Dict[str, Any]]:
    """Iterates over the mapped validation errors of an XML instance."""
    yield from SDC4Validator(schema_path, **kwargs).iter_errors_with_mapping(xml_path)
