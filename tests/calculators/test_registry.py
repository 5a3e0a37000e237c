"""
Unit tests for the calculator catalogue.
"""
import unittest

from app.projects import registry


class TestRegistryLookups(unittest.TestCase):

    def test_calculator_by_id(self):
        calculator = registry.get_calculator_by_id("bmi")
        self.assertEqual(calculator["name"], "BMI Calculator")
        self.assertEqual(calculator["url"], "/calculators/health/bmi")
        self.assertIsNone(registry.get_calculator_by_id("nope"))

    def test_ids_are_unique(self):
        ids = [c["id"] for c in registry.get_all_calculators()]
        self.assertEqual(len(ids), len(set(ids)))

    def test_every_calculator_has_a_known_category(self):
        category_ids = {c["id"] for c in registry.get_all_categories()}
        for calculator in registry.get_all_calculators():
            self.assertIn(calculator["category"], category_ids)

    def test_categories_in_order(self):
        names = [c["id"] for c in registry.get_all_categories()]
        self.assertEqual(names, ["financial", "health", "math", "general", "fun"])

    def test_featured_are_active(self):
        featured = registry.get_featured_calculators()
        self.assertTrue(featured)
        for calculator in featured:
            self.assertEqual(calculator["status"], "active")

    def test_by_category_flags_availability(self):
        calculators = registry.get_calculators_by_category("financial")
        by_id = {c["id"]: c for c in calculators}
        self.assertTrue(by_id["mortgage"]["available"])
        self.assertTrue(by_id["loan"]["available"])
        self.assertFalse(by_id["auto-loan"]["available"])
        self.assertNotIn("available", registry.get_calculator_by_id("mortgage"))

    def test_eight_calculators_per_category(self):
        for category in registry.get_all_categories():
            calculators = registry.get_calculators_by_category(category["id"])
            self.assertEqual(len(calculators), 8, category["id"])
            orders = [c["order"] for c in calculators]
            self.assertEqual(orders, sorted(orders))

    def test_coming_soon_calculators_are_never_featured(self):
        featured_ids = {c["id"] for c in registry.get_featured_calculators()}
        self.assertNotIn("name-numerology", featured_ids)
        self.assertIn("love", featured_ids)
        self.assertEqual(registry.get_calculator_by_id("currency-converter")["status"], "coming_soon")


class TestSearch(unittest.TestCase):

    def test_empty_search_returns_everything(self):
        self.assertEqual(len(registry.search_calculators()), len(registry.get_all_calculators()))

    def test_matches_name_case_insensitively(self):
        ids = [c["id"] for c in registry.search_calculators("MORTGAGE")]
        self.assertEqual(ids, ["mortgage"])

    def test_matches_description(self):
        ids = [c["id"] for c in registry.search_calculators("complex roots")]
        self.assertEqual(ids, ["quadratic-equation"])

    def test_category_filter(self):
        results = registry.search_calculators("", "fun")
        self.assertTrue(results)
        self.assertTrue(all(c["category"] == "fun" for c in results))

    def test_term_and_category_combine(self):
        self.assertEqual(registry.search_calculators("mortgage", "health"), [])


if __name__ == "__main__":
    unittest.main()
