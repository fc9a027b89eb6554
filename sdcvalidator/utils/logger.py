#
# Copyright (c), 2025, Axius-SDC, Inc.
# Copyright (c), 2016-2024, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
import logging
from collections.abc import Callable
from functools import wraps
from typing import Any, Optional, TypeVar, Union

from lxml import etree

from sdcvalidator.exceptions import SDCValidatorValueError

logger = logging.getLogger('sdcvalidator')

LOG_LEVELS = {'DEBUG', 'INFO', 'WARN', 'WARNING', 'ERROR', 'CRITICAL'}


def set_logging_level(level: Union[str, int]) -> None:
    """set logging level of sdcvalidator's logger."""
    if isinstance(level, str):
        _level = level.strip().upper()
        if _level not in LOG_LEVELS:
            raise SDCValidatorValueError(f"{level!r} is not a valid loglevel")
        logger.setLevel(getattr(logging, _level))
    else:
        logger.setLevel(level)


def get_loglevel(verbosity: int) -> int:
    """Maps a count of verbosity flags to a logging level, ERROR for no flags."""
    if verbosity <= 0:
        return logging.ERROR
    elif verbosity == 1:
        return logging.WARNING
    elif verbosity == 2:
        return logging.INFO
    else:
        return logging.DEBUG


RT = TypeVar('RT')


def logged(func: Callable[..., RT]) -> Callable[..., RT]:
    """
    A decorator for activating a logging level for a function. The keyword
    argument 'loglevel' is obtained from the keyword arguments and used by the
    wrapper function to set the logging level of the decorated function and
    to restore the original level after the call.
    """
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        loglevel: Optional[Union[int, str]] = kwargs.get('loglevel')
        if loglevel is None:
            return func(*args, **kwargs)
        else:
            current_level = logger.level
            set_logging_level(loglevel)
            try:
                return func(*args, **kwargs)
            finally:
                logger.setLevel(current_level)

    return wrapper


def dump_data(*args: Any) -> None:
    """Dump data to logger at debug level. XML trees and elements are serialized."""
    if not args or not logger.isEnabledFor(logging.DEBUG):
        return

    chunks: list[str] = [' dump data for sdcvalidator debugging\n']
    for item in args:
        chunks.append(repr(item))
        if isinstance(item, (etree._Element, etree._ElementTree)):
            chunks.append(etree.tostring(item, encoding='unicode'))
        chunks.append('')

    logger.debug('\n'.join(chunks))
