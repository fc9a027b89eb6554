#
# Copyright (c), 2025, Axius-SDC, Inc.
# All rights reserved.
# This file is distributed under the terms of the MIT License.
#
"""
Maps XML Schema validation errors to SDC4 ExceptionalValue types.
"""

import re
from typing import Any, Callable, Dict, Iterable, List, NamedTuple, Optional, Tuple, Union

from sdcvalidator.utils.logger import logger
from .constants import ExceptionalValueType
from .errors import ValidationError

DEFAULT_RULE_PRIORITY = 100
FALLBACK_RULE_PRIORITY = 1000

# The type returned when no rule matches, possible only if the rules are cleared
FALLBACK_EXCEPTIONAL_VALUE = ExceptionalValueType.NI


class MappingRule(NamedTuple):
    condition: Callable[[ValidationError], bool]
    ev_type: ExceptionalValueType
    priority: int


def _search_any(patterns: Iterable[str], text: str) -> bool:
    return any(re.search(pattern, text) for pattern in patterns)


def _contains_all(groups: Iterable[Tuple[str, ...]], text: str) -> bool:
    return any(all(word in text for word in words) for words in groups)


class ErrorMapper:
    """
    Maps validation errors to appropriate SDC4 ExceptionalValue types.

    The mapper uses a rule-based system to classify errors. Rules are evaluated
    in ascending priority order and the first matching rule wins. Rules can be
    customized or extended for domain-specific requirements.
    """

    def __init__(self):
        """Initialize the error mapper with default rules."""
        self._rules: List[MappingRule] = []
        self._register_default_rules()

    def _register_default_rules(self):
        """Register the default error mapping rules."""
        # Missing required elements/attributes
        self.add_rule(self._is_missing_required, ExceptionalValueType.NI, 10)

        # Type violations (wrong data type, invalid format)
        self.add_rule(self._is_type_violation, ExceptionalValueType.INV, 20)

        # Pattern, facet, or constraint violations
        self.add_rule(self._is_constraint_violation, ExceptionalValueType.INV, 30)

        # Enumeration violations
        self.add_rule(self._is_enumeration_violation, ExceptionalValueType.OTH, 40)

        # Unexpected elements/attributes in strict contexts
        self.add_rule(self._is_unexpected_content, ExceptionalValueType.NA, 50)

        # Encoding/format errors
        self.add_rule(self._is_encoding_error, ExceptionalValueType.UNC, 60)

        # Default fallback, after any custom rule added with the default priority
        self.add_rule(lambda err: True, ExceptionalValueType.NI, FALLBACK_RULE_PRIORITY)

    def add_rule(self, condition: Callable[[ValidationError], bool],
                 ev_type: Union[ExceptionalValueType, str],
                 priority: int = DEFAULT_RULE_PRIORITY):
        """
        Add a custom mapping rule.

        :param condition: A callable that takes an error and returns True if the rule matches.
        :param ev_type: The ExceptionalValueType to return when the rule matches, \
        or its code (e.g. 'INV').
        :param priority: The rule priority, lower values are evaluated first \
        (default: 100). Rules with the same priority keep the insertion order.
        """
        if isinstance(ev_type, str):
            ev_type = ExceptionalValueType.from_code(ev_type)
        self._rules.append(MappingRule(condition, ev_type, priority))
        self._rules.sort(key=lambda rule: rule.priority)

    @property
    def rules(self) -> Tuple[MappingRule, ...]:
        """The active rules, in evaluation order."""
        return tuple(self._rules)

    @property
    def rule_count(self) -> int:
        return len(self._rules)

    def clear_rules(self):
        """Remove all the rules, including the default ones."""
        self._rules.clear()

    def map_error(self, error: ValidationError) -> ExceptionalValueType:
        """
        Map a validation error to an ExceptionalValue type. A rule whose condition
        raises an exception is skipped.

        :param error: The validation error.
        :return: The appropriate ExceptionalValueType.
        """
        for rule in self._rules:
            try:
                if rule.condition(error):
                    return rule.ev_type
            except Exception as err:
                logger.warning("Error evaluating mapping rule %r: %s", rule.condition, err)

        if not self._rules:
            logger.warning("No error mapping rules, map the error to %s",
                           FALLBACK_EXCEPTIONAL_VALUE.code)
        return FALLBACK_EXCEPTIONAL_VALUE

    # =========================================================================
    # Error classification helper methods
    # =========================================================================

    @staticmethod
    def _get_message(error: Any) -> str:
        return (getattr(error, 'message', None) or '').lower()

    def _is_missing_required(self, error: ValidationError) -> bool:
        """Check if error indicates missing required element/attribute."""
        reason = self._get_message(error)
        if not reason:
            return False

        patterns = [
            r'missing required',
            r'missing child element',
            r'minimum .* is \d+',
        ]
        words = [
            ('required', 'missing'),
            ('element', 'required'),
            ('content', 'not complete'),
        ]
        return _search_any(patterns, reason) or _contains_all(words, reason)

    def _is_type_violation(self, error: ValidationError) -> bool:
        """Check if error indicates wrong data type."""
        # Decode errors typically indicate type issues
        if 'decode' in (getattr(error, 'kind', None) or '').lower():
            return True

        reason = self._get_message(error)
        if not reason:
            return False

        patterns = [
            r'not a valid value',
            r'invalid value',
            r'invalid literal',
            r'is not valid for type',
            r'cannot be converted',
            r'expected type',
            r'wrong type',
            r'malformed',
        ]
        words = [
            ('type', 'does not match'),
            ('invalid', 'format'),
        ]
        return _search_any(patterns, reason) or _contains_all(words, reason)

    def _is_constraint_violation(self, error: ValidationError) -> bool:
        """Check if error indicates constraint/facet violation."""
        reason = self._get_message(error)
        if not reason:
            return False

        patterns = [
            r'does not match pattern',
            r'not accepted by the pattern',
            r'length constraint',
            r'minlength|maxlength',
            r'mininclusive|maxinclusive',
            r'minexclusive|maxexclusive',
            r'totaldigits|fractiondigits',
        ]
        words = [
            ('pattern', 'not matched'),
            ('assertion', 'failed'),
            ('constraint', 'violated'),
            ('exceeds', 'maximum'),
            ('below', 'minimum'),
        ]
        return _search_any(patterns, reason) or _contains_all(words, reason)

    def _is_enumeration_violation(self, error: ValidationError) -> bool:
        """Check if error indicates enumeration violation."""
        reason = self._get_message(error)
        if not reason:
            return False

        patterns = [
            r'not in enumeration',
            r'invalid enumeration',
            r"facet 'enumeration'",
            r'must be one of',
        ]
        words = [
            ('not', 'allowed value'),
            ('not', 'permitted value'),
            ('value', 'not', 'allowed'),
        ]
        return _search_any(patterns, reason) or _contains_all(words, reason)

    def _is_unexpected_content(self, error: ValidationError) -> bool:
        """Check if error indicates unexpected element/attribute."""
        reason = self._get_message(error)
        if not reason:
            return False

        if 'value' not in reason and ('not allowed' in reason or 'not permitted' in reason):
            return True

        patterns = [
            r'unexpected',
            r'extra element',
            r'unknown element',
        ]
        words = [
            ('element', 'not expected'),
        ]
        return _search_any(patterns, reason) or _contains_all(words, reason)

    def _is_encoding_error(self, error: ValidationError) -> bool:
        """Check if error indicates encoding/format problem."""
        reason = self._get_message(error)
        if not reason:
            return False

        patterns = [
            r'encoding error',
            r'decode error',
            r'invalid character',
            r'whitespace',
        ]
        words = [
            ('character', 'not', 'allowed'),
        ]
        return _search_any(patterns, reason) or _contains_all(words, reason)

    def get_error_summary(self, error: ValidationError,
                          ev_type: Optional[ExceptionalValueType] = None) -> Dict[str, str]:
        """
        Generate a summary of the error mapping.

        :param error: The validation error.
        :param ev_type: The mapped ExceptionalValueType, computed if not provided.
        :return: A dictionary with error details.
        """
        if ev_type is None:
            ev_type = self.map_error(error)

        return {
            'xpath': error.path or '/',
            'error_type': error.kind or 'validation-error',
            'reason': error.message,
            'exceptional_value_type': ev_type.code,
            'exceptional_value_name': ev_type.ev_name,
            'description': ev_type.description,
        }
