#
# Copyright (c), 2025, Axius-SDC, Inc.
# All rights reserved.
# This file is distributed under the terms of the MIT License.
#
"""
Records exchanged between the validator backends, the error mapper and
the instance modifier.
"""
from dataclasses import dataclass
from typing import NamedTuple, Optional

from .constants import ExceptionalValueType


@dataclass
class ValidationError:
    """
    A validation error reported by an XSD validator backend.

    :param message: the error message.
    :param path: the XPath of the element where the error occurred.
    :param line: the line of the error in the XML source, if available.
    :param column: the column of the error in the XML source, if available.
    :param kind: the kind of error reported by the backend (e.g. the class \
    name of an xmlschema error or the libxml2 error type).
    """
    message: str
    path: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None
    kind: Optional[str] = None


class ErrorLocation(NamedTuple):
    """Where to inject an ExceptionalValue and why."""
    xpath: str
    ev_type: ExceptionalValueType
    reason: str
