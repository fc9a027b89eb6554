#
# Copyright (c), 2025, Axius-SDC, Inc.
# Copyright (c), 2016-2024, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
"""
This module contains the exception classes of the package.
"""
from typing import Any, Sequence


class SDCValidatorException(Exception):
    """The base exception class of the package."""


class SDCValidatorTypeError(SDCValidatorException, TypeError):
    pass


class SDCValidatorValueError(SDCValidatorException, ValueError):
    pass


class SDCValidationFailed(SDCValidatorException):
    """
    Raised in strict validation mode when the XML instance is not valid.

    :param errors: the validation errors collected for the instance.
    """
    def __init__(self, errors: Sequence[Any]) -> None:
        self.errors = list(errors)
        if self.errors:
            message = "Validation failed with {} error(s): {}".format(
                len(self.errors), getattr(self.errors[0], 'message', self.errors[0])
            )
        else:
            message = "Validation failed"
        super().__init__(message)

    @property
    def error_count(self) -> int:
        return len(self.errors)
