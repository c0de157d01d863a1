"""
Tests for configuration defaults and merging
"""

from django.test import TestCase, override_settings

from docprint.conf import DEFAULT_RENDER_CONFIG, build_config, normalize_orientation
from docprint.exceptions import ConfigurationError


class BuildConfigTestCase(TestCase):
    """Test merging defaults, settings and instance values"""

    def test_defaults_are_read_only(self):
        with self.assertRaises(TypeError):
            DEFAULT_RENDER_CONFIG['font'] = 'Courier'

    def test_build_config_returns_new_dict(self):
        first = build_config({'font': 'Courier'})
        second = build_config()

        self.assertEqual(first['font'], 'Courier')
        self.assertEqual(second['font'], 'Helvetica')
        self.assertEqual(DEFAULT_RENDER_CONFIG['font'], 'Helvetica')
        self.assertIsNot(first, second)

    def test_undeclared_values_are_skipped(self):
        config = build_config({'colour': 'blue'})
        self.assertNotIn('colour', config)
        self.assertEqual(set(config), set(DEFAULT_RENDER_CONFIG))

    @override_settings(DOCPRINT_DEFAULTS={'page_orientation': 'L', 'bogus': 1})
    def test_settings_overrides(self):
        with self.assertLogs('docprint.conf', level='WARNING') as logs:
            config = build_config()

        self.assertEqual(config['page_orientation'], 'L')
        self.assertNotIn('bogus', config)
        self.assertIn('bogus', logs.output[0])

    @override_settings(DOCPRINT_DEFAULTS=None)
    def test_empty_setting(self):
        self.assertEqual(build_config()['page_format'], 'A4')

    def test_invalid_orientation(self):
        with self.assertRaises(ConfigurationError):
            build_config({'page_orientation': 'Q'})


class NormalizeOrientationTestCase(TestCase):

    def test_accepted_values(self):
        self.assertEqual(normalize_orientation('p'), 'P')
        self.assertEqual(normalize_orientation(' L '), 'L')
        self.assertEqual(normalize_orientation('Landscape'), 'L')
        self.assertEqual(normalize_orientation('portrait'), 'P')

    def test_rejected_values(self):
        for value in ('', None, 'X', 'LL'):
            with self.subTest(value=value):
                with self.assertRaises(ConfigurationError):
                    normalize_orientation(value)
