#
# Copyright (c), 2025, Axius-SDC, Inc.
# Copyright (c), 2016-2020, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
# mypy: ignore-errors
"""Command Line Interface"""
import sys
import os
import argparse
import json

import xmlschema
from lxml import etree

from sdcvalidator import __version__
from sdcvalidator.exceptions import SDCValidatorException, SDCValidationFailed
from sdcvalidator.utils.logger import set_logging_level, get_loglevel
from sdcvalidator.sdc4 import SDC4Validator, XMLSchemaValidator, LxmlSchemaValidator, \
    DEFAULT_NAMESPACE_PREFIX


PROGRAM_NAME = os.path.basename(sys.argv[0])

EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_ERROR = 2

OPERATIONAL_ERRORS = (SDCValidatorException, xmlschema.XMLSchemaException, etree.Error, OSError)


def xsd_version_number(value):
    if value not in ('1.0', '1.1'):
        raise argparse.ArgumentTypeError("%r is not a valid XSD version" % value)
    return value


def validation_mode(value):
    if value not in ('strict', 'lax', 'skip'):
        raise argparse.ArgumentTypeError("%r is not a valid validation mode" % value)
    return value


def get_validator_backend(xsd_version, use_lxml=False):
    """Returns the validator backend, the xmlschema one for XSD 1.1 by default."""
    if use_lxml:
        return LxmlSchemaValidator()
    return XMLSchemaValidator(xsd_version or '1.1')


def print_report(report, verbosity):
    sys.stdout.write(f"Valid: {str(report['valid']).lower()}\n")
    sys.stdout.write(f"Errors: {report['error_count']}\n")
    if not report['error_count']:
        return

    sys.stdout.write("\nError summary:\n")
    for code, count in report['exceptional_value_type_counts'].items():
        if count:
            sys.stdout.write(f"  {code}: {count}\n")

    if verbosity > 0:
        sys.stdout.write("\nDetailed errors:\n")
        for error in report['errors']:
            sys.stdout.write(f"  {error['xpath']}: {error['reason']}\n")


def main():
    parser = argparse.ArgumentParser(prog=PROGRAM_NAME, add_help=True,
                                     description="SDC4 validator with ExceptionalValue recovery.")
    parser.usage = "%(prog)s [OPTION]... XML_FILE --schema PATH\n" \
                   "Try '%(prog)s --help' for more information."
    parser.add_argument('-v', dest='verbosity', action='count', default=0,
                        help="increase output verbosity.")
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('-s', '--schema', type=str, metavar='PATH', required=True,
                        help="path or URL to an XSD schema.")
    parser.add_argument('-r', '--recover', action='store_true', default=False,
                        help="insert ExceptionalValue elements for validation errors "
                             "and write the recovered XML to the output file.")
    parser.add_argument('-o', '--output', type=str, metavar='PATH',
                        help="output file for the recovered XML.")
    parser.add_argument('--report', action='store_true', default=False,
                        help="print a JSON validation report.")
    parser.add_argument('--check', action='store_true', default=False,
                        help="check validity only (exit code 0 = valid, 1 = invalid).")
    parser.add_argument('-p', '--prefix', type=str, default=DEFAULT_NAMESPACE_PREFIX,
                        help="namespace prefix for ExceptionalValue elements "
                             "(default is %r)." % DEFAULT_NAMESPACE_PREFIX)
    parser.add_argument('--mode', type=validation_mode, default='lax',
                        metavar='(strict, lax, skip)',
                        help="validation mode, 'lax' for default.")
    parser.add_argument('--xsd-version', type=xsd_version_number, default=None,
                        help="the XSD version of the schema (1.0 or 1.1), "
                             "1.1 for default.")
    parser.add_argument('--lxml', action='store_true', default=False,
                        help="validate with lxml (libxml2), that supports only XSD 1.0.")
    parser.add_argument('file', metavar='XML_FILE', help="XML file to be validated.")

    args = parser.parse_args()
    if args.recover and not args.output:
        parser.error("--output is required with --recover")
    if args.lxml and args.xsd_version is not None:
        parser.error("--xsd-version cannot be used with --lxml")

    set_logging_level(get_loglevel(args.verbosity))

    try:
        validator = SDC4Validator(
            schema=args.schema,
            namespace_prefix=args.prefix,
            validation=args.mode,
            validator=get_validator_backend(args.xsd_version, args.lxml),
        )

        if args.check:
            report = validator.validate_and_report(args.file)
            if args.verbosity > 0:
                sys.stdout.write(f"Valid: {str(report['valid']).lower()}\n")
                sys.stdout.write(f"Errors: {report['error_count']}\n")
        elif args.report:
            report = validator.validate_and_report(args.file)
            sys.stdout.write(json.dumps(report, indent=2) + '\n')
        elif args.recover:
            validator.save_recovered_xml(args.output, args.file)
            if args.verbosity > 0:
                sys.stdout.write(f"Recovered XML saved to: {args.output}\n")
            sys.exit(EXIT_VALID)
        else:
            report = validator.validate_and_report(args.file)
            print_report(report, args.verbosity)
    except SDCValidationFailed as err:
        sys.stderr.write(f"Error: {err}\n")
        sys.exit(EXIT_INVALID)
    except OPERATIONAL_ERRORS as err:
        sys.stderr.write(f"Error: {err}\n")
        sys.exit(EXIT_ERROR)

    sys.exit(EXIT_VALID if report['valid'] else EXIT_INVALID)


if __name__ == '__main__':
    main()
