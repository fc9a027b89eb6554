#
# Copyright (c), 2025, Axius-SDC, Inc.
# All rights reserved.
# This file is distributed under the terms of the MIT License.
#
"""
Schema loading with a cache keyed by the identity of the schema source.
"""
import hashlib
import os
import threading
from pathlib import Path
from typing import Any, Dict, Optional

from sdcvalidator.exceptions import SDCValidatorTypeError
from sdcvalidator.utils.logger import logger
from .backends import XSDValidator
from .xmlschema_backend import XMLSchemaValidator


class SchemaCache:
    """
    A cache of built schemas. The cache has no eviction policy: call
    :meth:`clear` to release the schemas when they are not needed anymore.
    """
    def __init__(self) -> None:
        self._schemas: Dict[str, Any] = {}
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return '%s(size=%d)' % (self.__class__.__name__, len(self))

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._schemas

    def __len__(self) -> int:
        with self._lock:
            return len(self._schemas)

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            return self._schemas.get(key)

    def set(self, key: str, schema: Any) -> None:
        with self._lock:
            self._schemas[key] = schema

    def clear(self) -> None:
        with self._lock:
            self._schemas.clear()


# The process-wide default cache
schema_cache = SchemaCache()


def clear_schema_cache() -> None:
    """Clears the process-wide schema cache."""
    schema_cache.clear()


def is_schema_text(source: Any) -> bool:
    return isinstance(source, bytes) or \
        isinstance(source, str) and source.lstrip().startswith('<')


def get_cache_key(source: Any, validator: XSDValidator) -> str:
    """
    Returns the cache key of a schema source for a validator backend.

    :param source: the schema text (a string or bytes) or its location.
    :param validator: the validator backend that builds the schema.
    """
    if is_schema_text(source):
        data = source if isinstance(source, bytes) else source.encode('utf-8')
        return f'{validator.name}:content:{hashlib.sha256(data).hexdigest()}'
    elif isinstance(source, Path):
        return f'{validator.name}:file:{source.absolute()}'
    elif isinstance(source, str):
        if '://' in source:
            return f'{validator.name}:file:{source}'
        return f'{validator.name}:file:{os.path.abspath(source)}'

    raise SDCValidatorTypeError(f"Unsupported schema source type: {type(source)!r}")


def load_schema(source: Any,
                validator: Optional[XSDValidator] = None,
                cache: Optional[SchemaCache] = None,
                use_cache: bool = True) -> Any:
    """
    Loads a schema, using a cached instance if the same source has been
    already loaded by the same kind of validator backend.

    :param source: the schema location (a path or a URL), the schema text \
    or an instance already built by the validator backend.
    :param validator: the validator backend, an :class:`XMLSchemaValidator` \
    instance for XSD 1.1 by default.
    :param cache: the schema cache to use, the process-wide cache by default.
    :param use_cache: if `False` the schema is always built and not cached.
    :return: the schema instance built by the validator backend.
    """
    if validator is None:
        validator = XMLSchemaValidator()
    if validator.is_schema(source):
        return source

    key = get_cache_key(source, validator)
    if cache is None:
        cache = schema_cache

    if use_cache:
        schema = cache.get(key)
        if schema is not None:
            logger.debug("Schema cache hit for %r", key)
            return schema
        logger.debug("Schema cache miss for %r", key)

    schema = validator.build_schema(source)
    if use_cache:
        cache.set(key, schema)
    return schema
