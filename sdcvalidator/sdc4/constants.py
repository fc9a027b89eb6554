#
# Copyright (c), 2025, Axius-SDC, Inc.
# All rights reserved.
# This file is distributed under the terms of the MIT License.
#
"""
Constants and type definitions for SDC4 integration.
"""
from enum import Enum
from typing import Dict, FrozenSet, Tuple

from sdcvalidator.exceptions import SDCValidatorValueError

SDC4_NAMESPACE = "https://semanticdatacharter.com/ns/sdc4/"
DEFAULT_NAMESPACE_PREFIX = "sdc4"

# Local name of the child element that carries the ExceptionalValue name
EV_NAME_TAG = "ev-name"

# The ISO 21090 NULL Flavors used by SDC4, in order of definition.
# Each code is mapped to its human-readable name and to its definition.
EXCEPTIONAL_VALUE_TYPES: Dict[str, Tuple[str, str]] = {
    # Primary types for validation errors
    'INV': ("Invalid",
            "The value as represented in the instance is not a member of the "
            "set of permitted data values in the constrained value domain of a variable."),
    'OTH': ("Other",
            "The actual value is not a member of the permitted data values in the "
            "variable (e.g., when the value of the variable is not by the coding system)."),
    'NI': ("No Information",
           "The value is exceptional (missing, omitted, incomplete, improper). "
           "No information as to the reason for being an exceptional value is provided. "
           "This is the most general exceptional value and the default."),
    'NA': ("Not Applicable",
           "No proper value is applicable in this context (e.g., the number of "
           "cigarettes smoked per day by a non-smoker subject)."),
    'UNC': ("Unencoded",
            "No attempt has been made to encode the information correctly but the "
            "raw source information is represented, usually in free text."),

    # Missing data types
    'UNK': ("Unknown", "A proper value is applicable, but not known."),
    'ASKU': ("Asked but Unknown",
             "Information was sought but not found (e.g., patient was asked but did not know)."),
    'ASKR': ("Asked and Refused",
             "Information was sought but refused to be provided (e.g., patient was "
             "asked but refused to answer)."),
    'NASK': ("Not Asked",
             "This information has not been sought (e.g., patient was not asked)."),
    'NAV': ("Not Available",
            "This information is not available and the specific reason is not known."),
    'MSK': ("Masked",
            "There is information on this item available but it has not been provided "
            "by the sender due to security, privacy or other reasons."),

    # Special value types
    'DER': ("Derived",
            "An actual value may exist, but it must be derived from the provided "
            "information; usually an expression is provided directly."),
    'PINF': ("Positive Infinity", "Positive infinity of numbers."),
    'NINF': ("Negative Infinity", "Negative infinity of numbers."),
    'TRC': ("Trace",
            "The content is greater or less than zero but too small to be quantified."),
}

EXCEPTIONAL_VALUE_CODES: Tuple[str, ...] = tuple(EXCEPTIONAL_VALUE_TYPES)

# Expanded names of the ExceptionalValue elements
EXCEPTIONAL_VALUE_TAGS: FrozenSet[str] = frozenset(
    f'{{{SDC4_NAMESPACE}}}{code}' for code in EXCEPTIONAL_VALUE_CODES
)


class ExceptionalValueType(Enum):
    """
    SDC4 ExceptionalValue types based on ISO 21090 NULL Flavors.

    These types indicate why data is missing or invalid. The value of each
    member is its code, that is also the local name of the element inserted
    into the XML instances.
    """
    INV = 'INV'
    OTH = 'OTH'
    NI = 'NI'
    NA = 'NA'
    UNC = 'UNC'
    UNK = 'UNK'
    ASKU = 'ASKU'
    ASKR = 'ASKR'
    NASK = 'NASK'
    NAV = 'NAV'
    MSK = 'MSK'
    DER = 'DER'
    PINF = 'PINF'
    NINF = 'NINF'
    TRC = 'TRC'

    @property
    def code(self) -> str:
        return self.value

    @property
    def ev_name(self) -> str:
        return EXCEPTIONAL_VALUE_TYPES[self.value][0]

    @property
    def description(self) -> str:
        return EXCEPTIONAL_VALUE_TYPES[self.value][1]

    @property
    def tag(self) -> str:
        """The expanded name of the ExceptionalValue element."""
        return f'{{{SDC4_NAMESPACE}}}{self.value}'

    @classmethod
    def from_code(cls, code: str) -> 'ExceptionalValueType':
        """Get ExceptionalValueType from its code string."""
        try:
            return cls(code)
        except ValueError:
            raise SDCValidatorValueError(f"Unknown ExceptionalValue code: {code!r}") from None
