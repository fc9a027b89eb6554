#
# Copyright (c), 2025, Axius-SDC, Inc.
# Copyright (c), 2016-2024, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
"""
SDCvalidator - Semantic Data Charter XML Validation Library

This library provides XML Schema validation specialized for Semantic Data Charter (SDC)
data models with automatic ExceptionalValue injection for validation errors.

Primary API - SDC4 Validation:
    - SDC4Validator: Main validator class
    - validate_with_recovery: Convenience function
    - ExceptionalValueType: ExceptionalValue type enumeration
    - ErrorMapper: Error classification system

Validator backends:
    - XMLSchemaValidator: xmlschema based XSD 1.0/1.1 validation (default)
    - LxmlSchemaValidator: libxml2 based XSD 1.0 validation
"""
from .exceptions import SDCValidatorException, SDCValidatorTypeError, \
    SDCValidatorValueError, SDCValidationFailed
from .utils.etree import parse_xml, serialize_xml, write_xml
from .utils.logger import set_logging_level

from .sdc4 import (
    SDC4Validator,
    ValidationMode,
    validate_with_recovery,
    is_valid,
    iter_errors,
    ErrorMapper,
    InstanceModifier,
    ValidationError,
    XSDValidator,
    XMLSchemaValidator,
    LxmlSchemaValidator,
    SchemaCache,
    load_schema,
    clear_schema_cache,
    ExceptionalValueType,
    SDC4_NAMESPACE,
    EXCEPTIONAL_VALUE_TYPES,
)

__version__ = '1.0.0'
__author__ = "Axius-SDC, Inc. (based on xmlschema by Davide Brunato)"
__contact__ = "tim@axius-sdc.com"
__copyright__ = "Copyright 2025, Axius-SDC, Inc. | Copyright 2016-2024, SISSA"
__license__ = "MIT"
__status__ = "Production/Stable"

__all__ = [
    # SDC4 Primary API
    'SDC4Validator', 'ValidationMode', 'validate_with_recovery', 'is_valid',
    'iter_errors', 'ErrorMapper', 'InstanceModifier', 'ExceptionalValueType',
    'ValidationError', 'SDC4_NAMESPACE', 'EXCEPTIONAL_VALUE_TYPES',

    # Schemas and validator backends
    'XSDValidator', 'XMLSchemaValidator', 'LxmlSchemaValidator', 'SchemaCache',
    'load_schema', 'clear_schema_cache',

    # Exceptions
    'SDCValidatorException', 'SDCValidatorTypeError', 'SDCValidatorValueError',
    'SDCValidationFailed',

    # Utilities
    'parse_xml', 'serialize_xml', 'write_xml', 'set_logging_level',
]
