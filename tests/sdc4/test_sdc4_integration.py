#
# Copyright (c), 2025, Axius-SDC, Inc.
# All rights reserved.
# This file is distributed under the terms of the MIT License.
#
"""
Integration tests for SDC4 validation with real XSD validator backends.
"""
import unittest
import tempfile
from pathlib import Path

import xmlschema
from lxml import etree

from sdcvalidator.exceptions import SDCValidatorValueError, SDCValidationFailed
from sdcvalidator.utils.etree import parse_xml
from sdcvalidator.sdc4.constants import SDC4_NAMESPACE, ExceptionalValueType
from sdcvalidator.sdc4.namespaces import is_exceptional_value_element
from sdcvalidator.sdc4.backends import LxmlSchemaValidator
from sdcvalidator.sdc4.xmlschema_backend import XMLSchemaValidator
from sdcvalidator.sdc4.schema import SchemaCache
from sdcvalidator.sdc4.validator import SDC4Validator, validate_with_recovery, \
    is_valid, iter_errors

CASES_DIR = Path(__file__).absolute().parent.parent.joinpath('test_cases/sdc4')

DM_SCHEMA = f"""<?xml version="1.0" encoding="UTF-8"?>
<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema"
    xmlns:sdc4="{SDC4_NAMESPACE}" targetNamespace="{SDC4_NAMESPACE}">
  <xs:element name="dm-test">
    <xs:complexType>
      <xs:sequence>
        <xs:element name="dm-label" type="xs:string"/>
        <xs:element name="count" type="xs:nonNegativeInteger"/>
      </xs:sequence>
    </xs:complexType>
  </xs:element>
</xs:schema>
"""

ASSERT_SCHEMA = """<?xml version="1.0" encoding="UTF-8"?>
<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema">
  <xs:element name="range">
    <xs:complexType>
      <xs:sequence>
        <xs:element name="min" type="xs:int"/>
        <xs:element name="max" type="xs:int"/>
      </xs:sequence>
      <xs:assert test="min le max"/>
    </xs:complexType>
  </xs:element>
</xs:schema>
"""


def get_markers(tree):
    return [e for e in tree.getroot().iter() if is_exceptional_value_element(e)]


def get_marker_code(elem):
    return etree.QName(elem).localname


class TestSDC4Integration(unittest.TestCase):
    """Integration tests with the default (xmlschema) validator backend."""

    def setUp(self):
        self.schema_path = CASES_DIR.joinpath('person.xsd')
        self.cache = SchemaCache()
        self.validator = SDC4Validator(self.schema_path, schema_cache=self.cache)

    def test_valid_instance_no_errors(self):
        xml_path = CASES_DIR.joinpath('person-valid.xml')
        report = self.validator.validate_and_report(xml_path)

        self.assertTrue(report['valid'])
        self.assertEqual(report['error_count'], 0)
        self.assertListEqual(report['errors'], [])

        recovered = self.validator.validate_with_recovery(xml_path)
        self.assertListEqual(get_markers(recovered), [])
        self.assertNotIn('sdc4', recovered.getroot().nsmap)

    def test_invalid_type_recovery(self):
        recovered = self.validator.validate_with_recovery(CASES_DIR.joinpath('person-invalid.xml'))
        person1, person2 = recovered.getroot()

        self.assertEqual(person1[0].tag, f'{{{SDC4_NAMESPACE}}}INV')
        self.assertEqual(person1[0][0].text, 'Invalid')
        self.assertIn('Validation error:', person1[0][1].text)
        self.assertIn("abc", person1[0][1].text)
        self.assertEqual(person1[1].tag, 'name')

        # The original invalid values are preserved
        self.assertEqual(person1.find('age').text, 'abc')
        self.assertEqual(person2.find('color').text, 'purple')

        codes = [get_marker_code(e) for e in person2 if is_exceptional_value_element(e)]
        self.assertIn('OTH', codes)
        self.assertEqual(recovered.getroot().nsmap, {'sdc4': SDC4_NAMESPACE})

    def test_error_mapping_report(self):
        report = self.validator.validate_and_report(CASES_DIR.joinpath('person-invalid.xml'))

        self.assertFalse(report['valid'])
        self.assertGreaterEqual(report['error_count'], 2)

        counts = report['exceptional_value_type_counts']
        self.assertEqual(sum(counts.values()), report['error_count'])
        self.assertGreaterEqual(counts['INV'], 1)
        self.assertGreaterEqual(counts['OTH'], 1)

        first = report['errors'][0]
        self.assertEqual(first['xpath'], '/root/person[1]/age')
        self.assertEqual(first['exceptional_value_type'], 'INV')
        self.assertEqual(first['line'], 5)
        for error in report['errors']:
            self.assertIn('error_type', error)
            self.assertIn('exceptional_value_name', error)
            self.assertIn('description', error)

    def test_missing_element_recovery(self):
        recovered = self.validator.validate_with_recovery(CASES_DIR.joinpath('person-missing.xml'))
        root = recovered.getroot()
        self.assertEqual(root[0].tag, f'{{{SDC4_NAMESPACE}}}NI')
        self.assertEqual(root[0][0].text, 'No Information')
        self.assertEqual(root[1].tag, 'person')

    def test_unexpected_element_recovery(self):
        recovered = self.validator.validate_with_recovery(
            CASES_DIR.joinpath('person-unexpected.xml')
        )
        person = recovered.getroot()[0]
        self.assertEqual(person[0].tag, f'{{{SDC4_NAMESPACE}}}NA')
        self.assertEqual(person[0][0].text, 'Not Applicable')
        self.assertEqual(person.find('nickname').text, 'Johnny')

    def test_existing_exceptional_values(self):
        xml_path = CASES_DIR.joinpath('person-recovered.xml')

        report = self.validator.validate_and_report(xml_path)
        self.assertFalse(report['valid'])

        recovered = self.validator.validate_with_recovery(xml_path)
        self.assertListEqual(get_markers(recovered), [])

    def test_round_trip_validation(self):
        with tempfile.TemporaryDirectory() as dirname:
            output_path = Path(dirname).joinpath('person-recovered.xml')
            recovered = self.validator.save_recovered_xml(
                output_path, CASES_DIR.joinpath('person-invalid.xml')
            )
            markers = [get_marker_code(e) for e in get_markers(recovered)]
            self.assertTrue(markers)

            saved = parse_xml(output_path)
            self.assertEqual([get_marker_code(e) for e in get_markers(saved)], markers)

            # Recovering a recovered instance replaces the markers
            recovered_again = self.validator.validate_with_recovery(output_path)
            self.assertEqual([get_marker_code(e) for e in get_markers(recovered_again)],
                             markers)
        self.assertEqual(len(self.cache), 1)

    def test_strict_mode(self):
        validator = SDC4Validator(self.schema_path, validation='strict', schema_cache=self.cache)
        with self.assertRaises(SDCValidationFailed) as ctx:
            validator.validate_with_recovery(CASES_DIR.joinpath('person-invalid.xml'))
        self.assertGreaterEqual(ctx.exception.error_count, 2)

        recovered = validator.validate_with_recovery(CASES_DIR.joinpath('person-valid.xml'))
        self.assertEqual(recovered.getroot().tag, 'root')

    def test_skip_mode(self):
        validator = SDC4Validator(self.schema_path, validation='skip')
        report = validator.validate_and_report(CASES_DIR.joinpath('person-invalid.xml'))
        self.assertTrue(report['valid'])
        self.assertEqual(report['error_count'], 0)

    def test_convenience_functions(self):
        xml_path = CASES_DIR.joinpath('person-invalid.xml')
        self.assertFalse(is_valid(self.schema_path, xml_path))
        self.assertTrue(is_valid(self.schema_path, CASES_DIR.joinpath('person-valid.xml')))

        errors = list(iter_errors(self.schema_path, xml_path))
        self.assertEqual(errors[0]['exceptional_value_type'], 'INV')

        recovered = validate_with_recovery(self.schema_path, xml_path)
        self.assertTrue(get_markers(recovered))

        with tempfile.TemporaryDirectory() as dirname:
            output_path = Path(dirname).joinpath('recovered.xml')
            validate_with_recovery(self.schema_path, xml_path, output_path,
                                   namespace_prefix='ev')
            self.assertIn(b'<ev:INV>', output_path.read_bytes())

    def test_malformed_instance(self):
        with self.assertRaises(etree.XMLSyntaxError):
            self.validator.validate_with_recovery('<root><person></root>')


class TestXMLSchemaBackend(unittest.TestCase):
    """Integration tests of the xmlschema validator backend."""

    def setUp(self):
        self.schema_path = CASES_DIR.joinpath('person.xsd')
        self.validator = SDC4Validator(self.schema_path, validator=XMLSchemaValidator('1.0'),
                                       schema_cache=SchemaCache())

    def test_backend(self):
        backend = XMLSchemaValidator()
        self.assertEqual(backend.xsd_version, '1.1')
        self.assertEqual(backend.name, 'xmlschema-1.1')
        self.assertEqual(repr(backend), "XMLSchemaValidator(xsd_version='1.1')")
        self.assertIsInstance(backend.build_schema(self.schema_path), xmlschema.XMLSchema11)
        self.assertIsInstance(XMLSchemaValidator('1.0').build_schema(self.schema_path),
                              xmlschema.XMLSchema10)

        with self.assertRaises(SDCValidatorValueError):
            XMLSchemaValidator('2.0')

    def test_default_backend(self):
        validator = SDC4Validator(self.schema_path, schema_cache=SchemaCache())
        self.assertIsInstance(validator.validator, XMLSchemaValidator)
        self.assertEqual(validator.validator.xsd_version, '1.1')
        self.assertIsInstance(validator.schema, xmlschema.XMLSchema11)

    def test_valid_instance(self):
        report = self.validator.validate_and_report(CASES_DIR.joinpath('person-valid.xml'))
        self.assertTrue(report['valid'])

    def test_invalid_instance(self):
        xml_path = CASES_DIR.joinpath('person-invalid.xml')
        report = self.validator.validate_and_report(xml_path)
        self.assertFalse(report['valid'])
        self.assertGreaterEqual(report['exceptional_value_type_counts']['INV'], 1)
        self.assertEqual(report['errors'][0]['xpath'], '/root/person[1]/age')

        recovered = self.validator.validate_with_recovery(xml_path)
        person1 = recovered.getroot()[0]
        self.assertEqual(person1[0].tag, f'{{{SDC4_NAMESPACE}}}INV')
        self.assertEqual(ExceptionalValueType.INV.ev_name, person1[0][0].text)

    def test_unexpected_child_path(self):
        errors = list(self.validator.iter_errors_with_mapping(
            CASES_DIR.joinpath('person-unexpected.xml')
        ))
        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0]['xpath'], '/root/person/nickname')
        self.assertEqual(errors[0]['exceptional_value_type'], 'NA')

    def test_xsd11_schema(self):
        validator = SDC4Validator(ASSERT_SCHEMA, schema_cache=SchemaCache())
        report = validator.validate_and_report('<range><min>1</min><max>5</max></range>')
        self.assertTrue(report['valid'])

        report = validator.validate_and_report('<range><min>5</min><max>1</max></range>')
        self.assertFalse(report['valid'])
        self.assertEqual(report['error_count'], 1)
        self.assertEqual(report['errors'][0]['xpath'], '/range')

        with self.assertRaises(xmlschema.XMLSchemaParseError):
            SDC4Validator(ASSERT_SCHEMA, validator=XMLSchemaValidator('1.0'),
                          schema_cache=SchemaCache()).validate_and_report('<range/>')


class TestLxmlBackend(unittest.TestCase):
    """Integration tests with the lxml validator backend."""

    def setUp(self):
        self.cache = SchemaCache()
        self.backend = LxmlSchemaValidator()

    def get_validator(self, schema):
        return SDC4Validator(schema, validator=self.backend, schema_cache=self.cache)

    def test_invalid_instance(self):
        validator = self.get_validator(CASES_DIR.joinpath('person.xsd'))
        report = validator.validate_and_report(CASES_DIR.joinpath('person-invalid.xml'))
        self.assertFalse(report['valid'])
        self.assertEqual(report['errors'][0]['xpath'], '/root/person[1]/age')
        self.assertEqual(report['errors'][0]['exceptional_value_type'], 'INV')
        self.assertEqual(report['errors'][0]['line'], 5)
        self.assertGreaterEqual(report['exceptional_value_type_counts']['OTH'], 1)

        recovered = validator.validate_with_recovery(CASES_DIR.joinpath('person-unexpected.xml'))
        self.assertEqual(recovered.getroot()[0][0].tag, f'{{{SDC4_NAMESPACE}}}NA')

    def test_target_namespace_schema(self):
        xml_data = f'<sdc4:dm-test xmlns:sdc4="{SDC4_NAMESPACE}">' \
                   '<dm-label>Test</dm-label><count>-3</count></sdc4:dm-test>'
        validator = self.get_validator(DM_SCHEMA)

        errors = list(validator.iter_errors_with_mapping(xml_data))
        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0]['xpath'], '/sdc4:dm-test/count')
        self.assertEqual(errors[0]['exceptional_value_type'], 'INV')

        recovered = validator.validate_with_recovery(xml_data)
        root = recovered.getroot()
        self.assertEqual(root[0].tag, f'{{{SDC4_NAMESPACE}}}INV')
        self.assertEqual(etree.tostring(recovered).count(b'xmlns:sdc4='), 1)

    def test_default_namespace_instance(self):
        schema = DM_SCHEMA.replace('targetNamespace=',
                                   'elementFormDefault="qualified" targetNamespace=')
        xml_data = f'<dm-test xmlns="{SDC4_NAMESPACE}">' \
                   '<dm-label>Test</dm-label><count>abc</count></dm-test>'
        validator = self.get_validator(schema)

        recovered = validator.validate_with_recovery(xml_data)
        root = recovered.getroot()
        self.assertEqual(root[0].tag, f'{{{SDC4_NAMESPACE}}}INV')
        self.assertEqual(root[0][0].tag, f'{{{SDC4_NAMESPACE}}}ev-name')
        self.assertEqual(root[2].text, 'abc')

        # The markers use the default namespace declaration, with the same expanded names
        self.assertIsNone(root[0].prefix)
        saved = etree.fromstring(etree.tostring(recovered))
        self.assertEqual([e.tag for e in saved.iter()], [e.tag for e in root.iter()])

    def test_xsd11_schema_is_not_supported(self):
        with self.assertRaises(etree.XMLSchemaParseError):
            self.get_validator(ASSERT_SCHEMA).validate_and_report('<range/>')


if __name__ == '__main__':
    unittest.main()
