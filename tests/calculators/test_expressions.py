"""
Unit tests for the scientific calculator's expression evaluator.

Run (with venv activated):
  python -m unittest tests.calculators.test_expressions -v
"""
import unittest

from app.projects.calculators.core.expressions import (
    MAX_EXPRESSION_LENGTH,
    ExpressionError,
    evaluate,
)


class TestEvaluate(unittest.TestCase):

    def test_arithmetic_and_precedence(self):
        self.assertEqual(evaluate("2 + 3 * 4"), 14)
        self.assertEqual(evaluate("(2 + 3) * 4"), 20)
        self.assertEqual(evaluate("-2 + 7 % 4"), 1)

    def test_caret_and_symbols(self):
        self.assertEqual(evaluate("2^10 + sqrt(16)"), 1028)
        self.assertEqual(evaluate("6 × 7 ÷ 2"), 21)

    def test_constants(self):
        self.assertEqual(evaluate("pi"), 3.14159265)
        self.assertEqual(evaluate("e"), 2.71828183)

    def test_angle_modes(self):
        self.assertEqual(evaluate("sin(30)"), 0.5)
        self.assertEqual(evaluate("cos(0)", angle_mode="rad"), 1)
        self.assertEqual(evaluate("sin(pi/2)", angle_mode="rad"), 1)

    def test_logs_and_factorial(self):
        self.assertEqual(evaluate("log(1000)"), 3)
        self.assertEqual(evaluate("ln(e)"), 1)
        self.assertEqual(evaluate("fact(5) / 3"), 40)
        self.assertEqual(evaluate("abs(-4)"), 4)

    def test_rejects_names_and_calls_outside_the_whitelist(self):
        for expression in ("__import__('os')", "x + 1", "open(1)", "'a'", "True + 1", "[1, 2]"):
            with self.subTest(expression=expression):
                with self.assertRaises(ExpressionError):
                    evaluate(expression)

    def test_rejects_bad_syntax_and_argument_counts(self):
        with self.assertRaises(ExpressionError):
            evaluate("2 +")
        with self.assertRaises(ExpressionError):
            evaluate("sqrt(1, 2)")
        with self.assertRaises(ExpressionError):
            evaluate("   ")

    def test_length_limit(self):
        with self.assertRaises(ExpressionError):
            evaluate("1+" * (MAX_EXPRESSION_LENGTH // 2) + "1")

    def test_math_errors(self):
        with self.assertRaises(ZeroDivisionError):
            evaluate("1 / 0")
        with self.assertRaises(ValueError):
            evaluate("sqrt(-1)")
        with self.assertRaises(ValueError):
            evaluate("fact(2.5)")

    def test_overflow(self):
        with self.assertRaises(OverflowError):
            evaluate("10^400")
        with self.assertRaises(OverflowError):
            evaluate("fact(171)")
        with self.assertRaises(OverflowError):
            evaluate("1e308 * 10")


if __name__ == "__main__":
    unittest.main()
