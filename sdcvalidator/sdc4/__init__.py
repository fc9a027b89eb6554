#
# Copyright (c), 2025, Axius-SDC, Inc.
# All rights reserved.
# This file is distributed under the terms of the MIT License.
#
"""
SDC4 (Semantic Data Charter Release 4) integration module.

This module provides functionality for validating XML instances against SDC4
data model schemas and translating validation errors into SDC4 ExceptionalValue
elements that are inserted into the XML instance.

The SDC4 pattern uses the "quarantine-and-tag" approach where invalid values
are preserved in the instance and flagged with ExceptionalValue elements for
data quality tracking and auditing.
"""

from .constants import (
    SDC4_NAMESPACE,
    DEFAULT_NAMESPACE_PREFIX,
    EXCEPTIONAL_VALUE_TYPES,
    EXCEPTIONAL_VALUE_CODES,
    ExceptionalValueType
)
from .errors import ValidationError, ErrorLocation
from .error_mapper import ErrorMapper, MappingRule
from .namespaces import ensure_sdc4_namespace, is_exceptional_value_element, \
    remove_exceptional_values
from .instance_modifier import InstanceModifier
from .backends import XSDValidator, LxmlSchemaValidator
from .xmlschema_backend import XMLSchemaValidator
from .schema import SchemaCache, schema_cache, clear_schema_cache, load_schema
from .validator import ValidationMode, SDC4Validator, validate_with_recovery, \
    is_valid, iter_errors

__all__ = [
    'SDC4Validator',
    'ValidationMode',
    'validate_with_recovery',
    'is_valid',
    'iter_errors',
    'ErrorMapper',
    'MappingRule',
    'InstanceModifier',
    'ValidationError',
    'ErrorLocation',
    'XSDValidator',
    'XMLSchemaValidator',
    'LxmlSchemaValidator',
    'SchemaCache',
    'schema_cache',
    'clear_schema_cache',
    'load_schema',
    'ensure_sdc4_namespace',
    'is_exceptional_value_element',
    'remove_exceptional_values',
    'SDC4_NAMESPACE',
    'DEFAULT_NAMESPACE_PREFIX',
    'EXCEPTIONAL_VALUE_TYPES',
    'EXCEPTIONAL_VALUE_CODES',
    'ExceptionalValueType',
]
