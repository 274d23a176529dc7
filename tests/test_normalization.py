import unittest
import sys
import os

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from wordle_engine.utils.normalization import (
    DEFAULT_RULES, TURKISH_RULES, get_locale_rules, lower, make_normalizer,
    normalize, strip_diacritics, upper
)


class TestNormalization(unittest.TestCase):
    def test_upper_cases_plain_word(self):
        self.assertEqual(normalize("kalem"), "KALEM")

    def test_strips_diacritics(self):
        self.assertEqual(normalize("şeker"), "SEKER")
        self.assertEqual(normalize("ağaç"), "AGAC")
        self.assertEqual(strip_diacritics("köprü"), "kopru")

    def test_decomposed_input_matches_composed(self):
        self.assertEqual(normalize("e\u0301le\u0300ve"), normalize("\u00e9l\u00e8ve"))
        self.assertEqual(normalize("élève"), "ELEVE")

    def test_turkish_dotted_and_dotless_i(self):
        self.assertEqual(upper("istek", TURKISH_RULES), "İSTEK")
        self.assertEqual(upper("ılık", TURKISH_RULES), "ILIK")
        self.assertEqual(lower("IŞIK", TURKISH_RULES), "ışık")
        self.assertEqual(lower("İSTEK", TURKISH_RULES), "istek")

    def test_turkish_capital_dotted_i_matches_plain_i(self):
        self.assertEqual(normalize("TERİM", TURKISH_RULES), "TERIM")
        self.assertEqual(normalize("terim", TURKISH_RULES), "TERIM")
        self.assertEqual(normalize("TERİM", DEFAULT_RULES), "TERIM")

    def test_normalize_is_a_fixed_point(self):
        for text in ["kalem", "ŞEKER", "ağaç", "TERİM", "ılık", "été", "Straße"]:
            for rules in (DEFAULT_RULES, TURKISH_RULES):
                once = normalize(text, rules)
                self.assertEqual(normalize(once, rules), once)

    def test_get_locale_rules(self):
        self.assertIs(get_locale_rules("tr"), TURKISH_RULES)
        self.assertIs(get_locale_rules("tr_TR"), TURKISH_RULES)
        self.assertIs(get_locale_rules("tr-TR"), TURKISH_RULES)
        self.assertIs(get_locale_rules("en_US"), DEFAULT_RULES)
        self.assertIs(get_locale_rules(""), DEFAULT_RULES)

    def test_make_normalizer_binds_rules(self):
        normalizer = make_normalizer(TURKISH_RULES)
        self.assertIs(normalizer.rules, TURKISH_RULES)
        self.assertEqual(normalizer(" yıldız "), "YILDIZ")


if __name__ == '__main__':
    unittest.main()
