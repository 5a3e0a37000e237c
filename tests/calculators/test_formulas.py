"""
Unit tests for the calculator formula library.

Run (with venv activated):
  python -m unittest tests.calculators.test_formulas -v
  pytest tests/calculators/ -v
"""
import math
import random
import string
import unittest
from datetime import date

from app.projects.calculators.core import formulas
from app.projects.calculators.core.formulas import (
    add_fractions,
    age_breakdown,
    combination,
    make_fraction,
    permutation,
    simplify_fraction,
    solve_quadratic,
    subtract_fractions,
)


class TestMortgage(unittest.TestCase):

    def test_standard_payment(self):
        payment = formulas.mortgage_payment(240000, 0.045 / 12, 360)
        self.assertAlmostEqual(payment, 1216.04, delta=0.01)

    def test_zero_rate_splits_loan_evenly(self):
        self.assertAlmostEqual(formulas.mortgage_payment(120000, 0, 360), 333.3333, places=3)

    def test_remaining_balance_endpoints(self):
        self.assertAlmostEqual(formulas.remaining_balance(200000, 0.005, 360, 0), 200000, places=4)
        self.assertEqual(formulas.remaining_balance(200000, 0.005, 360, 360), 0.0)

    def test_zero_rate_balance_is_linear(self):
        self.assertAlmostEqual(formulas.remaining_balance(1200, 0, 12, 6), 600)

    def test_amortization_schedule_runs_from_loan_to_zero(self):
        schedule = formulas.amortization_schedule(100000, 0.04 / 12, 15)
        self.assertEqual(len(schedule), 16)
        self.assertEqual(schedule[0], {"year": 0, "balance": 100000, "paid": 0})
        self.assertEqual(schedule[-1]["balance"], 0)
        self.assertEqual(schedule[-1]["paid"], 100000)
        balances = [row["balance"] for row in schedule]
        self.assertEqual(balances, sorted(balances, reverse=True))


class TestBmi(unittest.TestCase):

    def test_metric_bmi_is_normal(self):
        value = formulas.bmi(70, 1.75)
        self.assertAlmostEqual(value, 22.86, places=2)
        self.assertEqual(formulas.bmi_category(value), "Normal")

    def test_imperial_bmi(self):
        self.assertAlmostEqual(formulas.bmi_imperial(154, 70), 22.09, places=2)

    def test_non_positive_inputs_return_zero(self):
        self.assertEqual(formulas.bmi(0, 1.75), 0)
        self.assertEqual(formulas.bmi(70, 0), 0)
        self.assertEqual(formulas.bmi_imperial(-1, 70), 0)

    def test_category_thresholds(self):
        self.assertEqual(formulas.bmi_category(16.4), "Severely Underweight")
        self.assertEqual(formulas.bmi_category(16.5), "Underweight")
        self.assertEqual(formulas.bmi_category(18.5), "Normal")
        self.assertEqual(formulas.bmi_category(25), "Overweight")
        self.assertEqual(formulas.bmi_category(30), "Obese (Class I)")
        self.assertEqual(formulas.bmi_category(35), "Obese (Class II)")
        self.assertEqual(formulas.bmi_category(40), "Obese (Class III)")

    def test_colors_follow_categories(self):
        self.assertEqual(formulas.bmi_color(22), "bg-green-500")
        self.assertEqual(formulas.bmi_color(45), "bg-purple-500")


class TestAgeBreakdown(unittest.TestCase):

    def test_leap_day_birth_borrows_february_length(self):
        age = age_breakdown(date(2000, 2, 29), date(2023, 3, 1))
        self.assertEqual((age["years"], age["months"], age["days"]), (23, 0, 0))

    def test_borrow_repeats_across_short_months(self):
        age = age_breakdown(date(1990, 1, 31), date(1990, 3, 1))
        self.assertEqual((age["years"], age["months"], age["days"]), (0, 0, 29))

    def test_no_component_is_negative(self):
        as_of = date(2024, 3, 1)
        for birth in (date(1999, 12, 31), date(2000, 1, 30), date(2023, 3, 2), date(2020, 2, 29)):
            age = age_breakdown(birth, as_of)
            self.assertGreaterEqual(age["years"], 0)
            self.assertGreaterEqual(age["months"], 0)
            self.assertGreaterEqual(age["days"], 0)

    def test_month_borrow_when_birthday_not_reached(self):
        age = age_breakdown(date(1990, 6, 15), date(2020, 3, 10))
        self.assertEqual((age["years"], age["months"], age["days"]), (29, 8, 24))

    def test_totals(self):
        age = age_breakdown(date(2000, 1, 1), date(2000, 12, 31))
        self.assertEqual(age["total_days"], 365)
        self.assertEqual(age["total_weeks"], 52)
        self.assertEqual(age["total_months"], 11)

    def test_birthday_today_is_zero_days_away(self):
        age = age_breakdown(date(1990, 5, 15), date(2020, 5, 15))
        self.assertEqual(age["years"], 30)
        self.assertEqual(age["next_birthday"], date(2020, 5, 15))
        self.assertEqual(age["days_until_birthday"], 0)

    def test_next_birthday_rolls_to_next_year(self):
        age = age_breakdown(date(1990, 1, 10), date(2020, 5, 15))
        self.assertEqual(age["next_birthday"], date(2021, 1, 10))
        self.assertEqual(age["days_until_birthday"], (date(2021, 1, 10) - date(2020, 5, 15)).days)

    def test_leap_day_birthday_in_common_year(self):
        age = age_breakdown(date(2000, 2, 29), date(2023, 1, 10))
        self.assertEqual(age["next_birthday"], date(2023, 2, 28))


class TestFractions(unittest.TestCase):

    def test_add_and_subtract_are_inverse(self):
        pairs = [((1, 2), (1, 4)), ((-3, 7), (5, 9)), ((4, -6), (2, 3)), ((0, 5), (7, 8))]
        for (n1, d1), (n2, d2) in pairs:
            a = make_fraction(n1, d1)
            b = make_fraction(n2, d2)
            self.assertEqual(subtract_fractions(add_fractions(a, b), b), simplify_fraction(a))

    def test_operations(self):
        half = make_fraction(1, 2)
        quarter = make_fraction(1, 4)
        self.assertEqual(formulas.add_fractions(half, quarter), make_fraction(3, 4))
        self.assertEqual(formulas.subtract_fractions(quarter, half), make_fraction(-1, 4))
        self.assertEqual(formulas.multiply_fractions(make_fraction(2, 3), make_fraction(3, 4)), half)
        self.assertEqual(formulas.divide_fractions(half, quarter), make_fraction(2, 1))

    def test_sign_moves_to_numerator(self):
        self.assertEqual(simplify_fraction(make_fraction(2, -4)), make_fraction(-1, 2))
        self.assertEqual(simplify_fraction(make_fraction(-2, -4)), make_fraction(1, 2))

    def test_zero_numerator_simplifies(self):
        self.assertEqual(simplify_fraction(make_fraction(0, 5)), make_fraction(0, 1))

    def test_format_fraction(self):
        self.assertEqual(formulas.format_fraction(make_fraction(4, 1)), "4")
        self.assertEqual(formulas.format_fraction(make_fraction(7, 2)), "3 1/2")
        self.assertEqual(formulas.format_fraction(make_fraction(-7, 2)), "-3 1/2")
        self.assertEqual(formulas.format_fraction(make_fraction(3, 4)), "3/4")
        self.assertEqual(formulas.format_fraction(make_fraction(-3, 4)), "-3/4")


class TestPermutationCombination(unittest.TestCase):

    def test_small_values(self):
        self.assertEqual(permutation(5, 3), 60)
        self.assertEqual(combination(5, 3), 10)

    def test_n_less_than_r_is_zero(self):
        self.assertEqual(permutation(3, 5), 0)
        self.assertEqual(combination(3, 5), 0)

    def test_combination_symmetry(self):
        for n in (0, 1, 7, 52, 170):
            for r in range(0, n + 1, max(1, n // 5)):
                self.assertEqual(combination(n, r), combination(n, n - r))

    def test_permutation_is_combination_times_r_factorial(self):
        for n, r in ((10, 3), (52, 5), (170, 85), (170, 170)):
            self.assertEqual(permutation(n, r), combination(n, r) * math.factorial(r))

    def test_exact_at_upper_limit(self):
        self.assertEqual(combination(170, 85), math.comb(170, 85))


class TestQuadratic(unittest.TestCase):

    def test_two_real_roots(self):
        solution = solve_quadratic(1, 3, -4)
        self.assertEqual(solution["discriminant"], 25)
        self.assertTrue(solution["has_real_roots"])
        self.assertFalse(solution["has_complex_roots"])
        self.assertEqual({solution["root1"], solution["root2"]}, {1, -4})

    def test_repeated_root(self):
        solution = solve_quadratic(1, 2, 1)
        self.assertEqual(solution["discriminant"], 0)
        self.assertEqual(solution["root1"], -1)
        self.assertEqual(solution["root2"], -1)

    def test_complex_roots(self):
        solution = solve_quadratic(1, 0, 1)
        self.assertEqual(solution["discriminant"], -4)
        self.assertTrue(solution["has_complex_roots"])
        self.assertFalse(solution["has_real_roots"])
        self.assertIsNone(solution["root1"])
        self.assertEqual(solution["real_part"], 0)
        self.assertEqual(solution["imaginary_part"], 1)

    def test_imaginary_part_is_positive_for_negative_a(self):
        solution = solve_quadratic(-1, 2, -5)
        self.assertEqual(solution["real_part"], 1)
        self.assertEqual(solution["imaginary_part"], 2)


class TestTriangle(unittest.TestCase):

    def test_areas(self):
        self.assertEqual(formulas.triangle_area(5, 4), 10.0)
        self.assertEqual(formulas.triangle_area_from_sides(3, 4, 5), 6.0)

    def test_perimeter(self):
        self.assertEqual(formulas.triangle_perimeter(3, 4, 5), 12)

    def test_inequality_is_strict(self):
        self.assertTrue(formulas.is_valid_triangle(3, 4, 5))
        self.assertFalse(formulas.is_valid_triangle(1, 1, 10))
        self.assertFalse(formulas.is_valid_triangle(1, 2, 3))
        self.assertFalse(formulas.is_valid_triangle(0, 1, 1))


class TestTimesheet(unittest.TestCase):

    def test_day_shift(self):
        self.assertEqual(formulas.timesheet_hours("09:00", "17:00", 60), 7.0)

    def test_overnight_shift(self):
        self.assertEqual(formulas.timesheet_hours("22:00", "06:00", 30), 7.5)

    def test_break_longer_than_shift_floors_at_zero(self):
        self.assertEqual(formulas.timesheet_hours("09:00", "09:30", 60), 0)

    def test_rounds_to_two_decimals(self):
        self.assertEqual(formulas.timesheet_hours("09:00", "09:20", 0), 0.33)

    def test_missing_time_is_zero(self):
        self.assertEqual(formulas.timesheet_hours("", "17:00", 0), 0)


class TestPercentages(unittest.TestCase):

    def test_percent_of(self):
        self.assertEqual(formulas.percent_of(10, 100), 10)

    def test_percent_change(self):
        change = formulas.percent_change(100, 120)
        self.assertAlmostEqual(change["percent_change"], 20)
        self.assertTrue(change["is_increase"])
        change = formulas.percent_change(100, 80)
        self.assertAlmostEqual(change["percent_change"], 20)
        self.assertFalse(change["is_increase"])

    def test_value_from_percentage(self):
        self.assertEqual(formulas.value_from_percentage(75, 25), 300)

    def test_reverse_percentage(self):
        self.assertAlmostEqual(formulas.reverse_percentage(120, 20), 100)


class TestStatistics(unittest.TestCase):

    def test_parse_numbers_drops_invalid_tokens(self):
        self.assertEqual(formulas.parse_numbers("1, 2 3\n4, abc, inf, nan"), [1, 2, 3, 4])
        self.assertEqual(formulas.parse_numbers(""), [])

    def test_mean_and_median(self):
        self.assertEqual(formulas.mean([1, 2, 3, 4]), 2.5)
        self.assertEqual(formulas.median([3, 1, 2]), 2)
        self.assertEqual(formulas.median([4, 1, 3, 2]), 2.5)

    def test_sample_and_population_variance(self):
        values = [2, 4, 4, 4, 5, 5, 7, 9]
        self.assertEqual(formulas.variance(values, population=True), 4)
        self.assertAlmostEqual(formulas.variance(values), 32 / 7)
        self.assertEqual(formulas.standard_deviation(values, population=True), 2)

    def test_single_value_has_no_spread(self):
        self.assertEqual(formulas.variance([5]), 0)


class TestCompoundInterest(unittest.TestCase):

    def test_annual_compounding(self):
        growth = formulas.compound_interest(1000, 10, 2, compound_frequency="annually")
        self.assertEqual(growth["future_value"], 1210)
        self.assertEqual(growth["interest_earned"], 210)
        self.assertEqual([row["balance"] for row in growth["yearly"]], [1100, 1210])

    def test_contributions_without_interest(self):
        growth = formulas.compound_interest(
            1000, 0, 1, compound_frequency="monthly",
            contribution=100, contribution_frequency="monthly",
        )
        self.assertEqual(growth["future_value"], 2200)
        self.assertEqual(growth["total_contributions"], 2200)
        self.assertEqual(growth["interest_earned"], 0)

    def test_inflation_adjustment(self):
        growth = formulas.compound_interest(
            1000, 0, 1, compound_frequency="annually",
            inflation_rate=10, include_inflation=True,
        )
        self.assertEqual(growth["inflation_adjusted"], 909)


class TestPetAge(unittest.TestCase):

    def test_first_two_years(self):
        self.assertEqual(formulas.pet_human_age("dog", 0.5), 7.5)
        self.assertEqual(formulas.pet_human_age("dog", 1), 15)
        self.assertEqual(formulas.pet_human_age("cat", 2), 24)

    def test_dog_size_classes(self):
        self.assertEqual(formulas.pet_human_age("dog", 3, 5), 28)
        self.assertEqual(formulas.pet_human_age("dog", 3, 30), 29)
        self.assertEqual(formulas.pet_human_age("dog", 3, 60), 30)

    def test_cat(self):
        self.assertEqual(formulas.pet_human_age("cat", 3), 28)


class TestTinyRates(unittest.TestCase):

    def test_payment_with_tiny_rate_matches_even_split(self):
        self.assertAlmostEqual(formulas.mortgage_payment(100000, 1e-12, 360), 100000 / 360, places=4)

    def test_balance_with_tiny_rate_is_linear(self):
        self.assertAlmostEqual(formulas.remaining_balance(1200, 1e-13, 12, 6), 600, places=4)


class TestLoanSchedule(unittest.TestCase):

    def test_without_interest(self):
        schedule = formulas.loan_schedule(1200, 0, 12, 100)
        self.assertEqual(schedule["months"], 12)
        self.assertEqual(schedule["total_interest"], 0)
        self.assertEqual(schedule["total_paid"], 1200)
        self.assertEqual(len(schedule["yearly"]), 1)
        self.assertEqual(schedule["yearly"][0]["balance"], 0)

    def test_extra_payment_shortens_the_loan(self):
        schedule = formulas.loan_schedule(1200, 0, 12, 100, extra_payment=100)
        self.assertEqual(schedule["months"], 6)
        self.assertEqual(schedule["yearly"][0]["year"], 1)

    def test_interest_is_charged_on_the_balance(self):
        payment = formulas.mortgage_payment(10000, 0.01, 24)
        schedule = formulas.loan_schedule(10000, 0.01, 24, payment)
        self.assertEqual(schedule["months"], 24)
        self.assertAlmostEqual(schedule["total_paid"], payment * 24, places=4)
        self.assertAlmostEqual(schedule["total_interest"], payment * 24 - 10000, places=4)
        self.assertEqual([row["year"] for row in schedule["yearly"]], [1, 2])


class TestInterestGrowth(unittest.TestCase):

    def test_simple_interest(self):
        rows = formulas.simple_interest_growth(1000, 5, 2)
        self.assertEqual(len(rows), 3)
        self.assertAlmostEqual(rows[-1]["balance"], 1100)
        self.assertEqual(rows[-1]["deposited"], 1000)

    def test_compound_interest(self):
        rows = formulas.compound_interest_growth(1000, 10, 2, 1)
        self.assertAlmostEqual(rows[-1]["balance"], 1210, places=6)

    def test_contributions_without_interest(self):
        rows = formulas.compound_interest_growth(1000, 0, 3, 12, annual_contribution=1200)
        self.assertAlmostEqual(rows[-1]["balance"], 4600)
        self.assertEqual(rows[-1]["deposited"], 4600)


class TestCardPayoff(unittest.TestCase):

    def test_months_without_interest(self):
        self.assertEqual(formulas.card_payoff_months(1000, 0, 100), 10)

    def test_payment_for_months_round_trips(self):
        payment = formulas.card_payment_for_months(1000, 0.01, 12)
        self.assertEqual(payment, 88.85)
        self.assertEqual(formulas.card_payoff_months(1000, 0.01, payment), 12)

    def test_huge_payment_takes_one_month(self):
        self.assertEqual(formulas.card_payoff_months(100, 0.01, 1e9), 1)

    def test_schedule_ends_at_zero(self):
        rows = formulas.card_payoff_schedule(1000, 0.01, 88.85, 12)
        self.assertEqual(len(rows), 12)
        self.assertEqual(rows[-1]["balance"], 0.0)
        self.assertAlmostEqual(sum(row["principal"] for row in rows), 1000, places=2)


class TestRetirement(unittest.TestCase):

    def test_inflate(self):
        self.assertAlmostEqual(formulas.inflate(100, 10, 2), 121)

    def test_goal_without_returns(self):
        self.assertEqual(formulas.retirement_goal(12000, 1, 0), 12000)

    def test_goal_is_present_value_of_withdrawals(self):
        self.assertAlmostEqual(formulas.retirement_goal(12000, 10, 6), 90073.45, delta=1)

    def test_savings_accumulate_contributions(self):
        rows = formulas.retirement_savings(30, 1, 0, 100, 0)
        self.assertEqual(len(rows), 2)
        self.assertEqual(rows[-1]["age"], 31)
        self.assertEqual(rows[-1]["savings"], 1200)
        self.assertEqual(rows[-1]["interest"], 0)

    def test_withdrawals_stop_when_money_runs_out(self):
        rows = formulas.retirement_withdrawals(10000, 65, 5, 12000, 0, 0)
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0]["age"], 66)
        self.assertEqual(rows[0]["savings"], 0)

    def test_monthly_saving(self):
        self.assertEqual(formulas.monthly_saving_for(1200, 0, 1), 100)
        self.assertEqual(formulas.monthly_saving_for(0, 5, 10), 0)
        self.assertLess(formulas.monthly_saving_for(1200, 5, 1), 100)


class TestInvestmentGrowth(unittest.TestCase):

    def test_contributions_without_returns(self):
        rows = formulas.investment_growth(1000, 100, 0, 2, 12)
        self.assertEqual(len(rows), 3)
        self.assertEqual(rows[-1]["value"], 3400)
        self.assertEqual(rows[-1]["interest"], 0)

    def test_annual_compounding(self):
        rows = formulas.investment_growth(1000, 0, 12, 1, 1)
        self.assertAlmostEqual(rows[-1]["value"], 1120)
        self.assertAlmostEqual(rows[-1]["interest"], 120)


class TestCalories(unittest.TestCase):

    def test_bmr(self):
        self.assertEqual(formulas.bmr_mifflin_st_jeor("male", 70, 175, 30), 1648.75)
        self.assertEqual(formulas.bmr_mifflin_st_jeor("female", 70, 175, 30), 1482.75)

    def test_daily_calories_by_goal(self):
        maintain = formulas.daily_calories("male", 70, 175, 30, "moderate", "maintain")
        self.assertEqual(maintain, {"bmr": 1649, "tdee": 2556, "calories": 2556})
        lose = formulas.daily_calories("male", 70, 175, 30, "moderate", "lose")
        self.assertEqual(lose["calories"], 2056)

    def test_macro_grams(self):
        self.assertEqual(formulas.macro_grams(2000, "maintain"), {"protein": 150, "carbs": 200, "fat": 67})

    def test_weight_change(self):
        self.assertAlmostEqual(formulas.weight_change_kg(-500, 7), 0.4545, places=4)


class TestBodyFat(unittest.TestCase):

    def test_navy_method(self):
        percent = formulas.body_fat_navy("male", 175, 85, 38)
        self.assertTrue(15 < percent < 19)
        self.assertEqual(formulas.body_fat_category("male", percent), "Fitness")

    def test_skinfold_is_higher_for_women(self):
        male = formulas.body_fat_skinfold("male", 30, 45)
        female = formulas.body_fat_skinfold("female", 30, 45)
        self.assertTrue(10 < male < 15)
        self.assertGreater(female, male)

    def test_from_bmi(self):
        self.assertAlmostEqual(formulas.body_fat_from_bmi("male", 25, 30), 20.7)
        self.assertAlmostEqual(formulas.body_fat_from_bmi("female", 25, 30), 31.5)

    def test_categories(self):
        self.assertEqual(formulas.body_fat_category("male", 5), "Essential Fat")
        self.assertEqual(formulas.body_fat_category("female", 40), "Obese")


class TestPregnancy(unittest.TestCase):

    def test_from_last_period(self):
        dates = formulas.pregnancy_dates(date(2024, 1, 1), "lmp")
        self.assertEqual(dates["due_date"], date(2024, 10, 7))
        self.assertEqual(dates["conception"], date(2024, 1, 15))
        self.assertEqual(dates["first_trimester_end"], date(2024, 4, 1))
        self.assertIsNone(dates["weeks"])

    def test_longer_cycle_moves_dates_later(self):
        dates = formulas.pregnancy_dates(date(2024, 1, 1), "lmp", cycle_length=35)
        self.assertEqual(dates["due_date"], date(2024, 10, 14))
        self.assertEqual(dates["conception"], date(2024, 1, 22))

    def test_from_conception(self):
        dates = formulas.pregnancy_dates(date(2024, 1, 15), "conception")
        self.assertEqual(dates["due_date"], date(2024, 10, 7))

    def test_progress(self):
        dates = formulas.pregnancy_dates(date(2024, 1, 1), "lmp", today=date(2024, 2, 12))
        self.assertEqual((dates["weeks"], dates["days"]), (6, 0))
        self.assertEqual(dates["trimester"], 1)

    def test_no_trimester_after_due_date(self):
        dates = formulas.pregnancy_dates(date(2024, 1, 1), "lmp", today=date(2024, 11, 1))
        self.assertIsNone(dates["trimester"])


class TestDates(unittest.TestCase):

    def test_difference_in_either_order(self):
        difference = formulas.date_difference(date(2024, 3, 1), date(2024, 1, 1))
        self.assertTrue(difference["end_before_start"])
        self.assertEqual((difference["years"], difference["months"], difference["days"]), (0, 2, 0))
        self.assertEqual(difference["total_days"], 60)

    def test_calendar_difference_totals(self):
        difference = formulas.calendar_difference(date(2020, 1, 1), date(2021, 1, 15))
        self.assertEqual(difference["total_months"], 12)
        self.assertEqual(difference["total_days"], 380)
        self.assertEqual(difference["total_weeks"], 54)

    def test_shift_clamps_month_end(self):
        self.assertEqual(formulas.shift_date(date(2024, 1, 31), 1, "months"), date(2024, 2, 29))
        self.assertEqual(formulas.shift_date(date(2023, 1, 31), 1, "months"), date(2023, 2, 28))
        self.assertEqual(formulas.shift_date(date(2024, 2, 29), 1, "years"), date(2025, 2, 28))

    def test_shift_days_and_weeks(self):
        self.assertEqual(formulas.shift_date(date(2024, 1, 1), -1, "days"), date(2023, 12, 31))
        self.assertEqual(formulas.shift_date(date(2024, 1, 1), 2, "weeks"), date(2024, 1, 15))

    def test_shift_past_calendar_end_raises(self):
        with self.assertRaises((OverflowError, ValueError)):
            formulas.shift_date(date(9999, 12, 31), 1, "days")
        with self.assertRaises(ValueError):
            formulas.shift_date(date(9999, 12, 31), 1, "months")

    def test_no_next_birthday_past_calendar_end(self):
        age = age_breakdown(date(2000, 1, 1), date(9999, 12, 31))
        self.assertIsNone(age["next_birthday"])
        self.assertIsNone(age["days_until_birthday"])


class TestTime(unittest.TestCase):

    def test_to_seconds(self):
        self.assertEqual(formulas.to_seconds(1, 30, 0), 5400)

    def test_format_clock(self):
        self.assertEqual(formulas.format_clock(0), "00:00:00")
        self.assertEqual(formulas.format_clock(-3661), "-01:01:01")

    def test_describe_duration(self):
        self.assertEqual(formulas.describe_duration(3903), "1 hour 5 minutes 3 seconds")
        self.assertEqual(formulas.describe_duration(45), "45 seconds")
        self.assertEqual(formulas.describe_duration(7200), "2 hours 0 minutes 0 seconds")


class TestGpa(unittest.TestCase):

    def test_credit_weighted(self):
        result = formulas.grade_point_average([("a", 3), ("b", 3)])
        self.assertEqual(result["gpa"], 3.5)
        self.assertEqual(result["total_credits"], 6)

    def test_unknown_grades_are_skipped(self):
        result = formulas.grade_point_average([("a", 3), ("z", 4)])
        self.assertEqual(result["gpa"], 4.0)
        self.assertEqual(result["total_credits"], 3)

    def test_no_courses(self):
        self.assertEqual(formulas.grade_point_average([])["gpa"], 0)

    def test_letters_and_messages(self):
        self.assertEqual(formulas.gpa_letter(4.0), "A")
        self.assertEqual(formulas.gpa_letter(3.5), "B+")
        self.assertEqual(formulas.gpa_letter(0.5), "F")
        self.assertTrue(formulas.gpa_message(3.5).startswith("Excellent"))


class TestPasswords(unittest.TestCase):

    def test_every_chosen_set_is_used(self):
        sets = [string.ascii_uppercase, string.digits]
        password = formulas.generate_password(16, sets, rng=random.Random(42))
        self.assertEqual(len(password), 16)
        self.assertTrue(any(char in string.ascii_uppercase for char in password))
        self.assertTrue(any(char in string.digits for char in password))
        self.assertTrue(all(char in "".join(sets) for char in password))

    def test_seeded_generator_is_repeatable(self):
        sets = list(formulas.PASSWORD_CHARACTER_SETS.values())
        first = formulas.generate_password(12, sets, rng=random.Random(7))
        second = formulas.generate_password(12, sets, rng=random.Random(7))
        self.assertEqual(first, second)

    def test_strength(self):
        self.assertEqual(formulas.password_strength(16, 4), 92)
        self.assertEqual(formulas.password_strength_label(92), "Very Strong")
        self.assertEqual(formulas.password_strength_label(formulas.password_strength(8, 1)), "Weak")


class TestLove(unittest.TestCase):

    def test_score_ignores_order_case_and_spacing(self):
        score = formulas.love_score("Romeo", "Juliet")
        self.assertEqual(score, formulas.love_score("Juliet", "Romeo"))
        self.assertEqual(score, formulas.love_score(" ROMEO ", "juliet"))
        self.assertTrue(1 <= score <= 100)

    def test_messages(self):
        self.assertTrue(formulas.love_message(95).startswith("Soulmates!"))
        self.assertTrue(formulas.love_message(5).startswith("Not the best match"))


class TestLuckyNumber(unittest.TestCase):

    def test_name_and_date_digits(self):
        self.assertEqual(formulas.lucky_number("a", date(2000, 1, 1)), 5)
        self.assertEqual(formulas.lucky_number("abc", date(2000, 1, 1)), 1)

    def test_multiple_of_nine_is_nine(self):
        self.assertEqual(formulas.lucky_number("E", date(2000, 1, 1)), 9)

    def test_non_letters_are_ignored(self):
        self.assertEqual(formulas.lucky_number("a b-c!", date(2000, 1, 1)), 1)


class TestBingeWatch(unittest.TestCase):

    def test_totals(self):
        result = formulas.binge_watch_time(4, 8, 50, 3, 60)
        self.assertEqual(result["episodes"], 32)
        self.assertAlmostEqual(result["hours"], 32 * 49 / 60)
        self.assertAlmostEqual(result["days"], 32 * 49 / 60 / 3)
        self.assertAlmostEqual(result["intro_hours_saved"], 32 / 60)
        self.assertAlmostEqual(result["episodes_per_day"], 3.6)

    def test_format_hours_minutes(self):
        self.assertEqual(formulas.format_hours_minutes(2.5), "2 hours 30 minutes")
        self.assertEqual(formulas.format_hours_minutes(1.0), "1 hour")
        self.assertEqual(formulas.format_hours_minutes(0.75), "45 minutes")
        self.assertEqual(formulas.format_hours_minutes(1.9999), "2 hours")


class TestActivityAndAlcohol(unittest.TestCase):

    def test_activity_calories(self):
        self.assertAlmostEqual(formulas.activity_calories(3.5, 70, 60), 245)

    def test_one_beer(self):
        result = formulas.blood_alcohol("male", 80, [(5, 355, 1, 0)], "light")
        self.assertEqual(result["bac"], 0.03)
        self.assertAlmostEqual(result["hours_to_sober"], 2.0)

    def test_alcohol_is_eliminated_over_time(self):
        result = formulas.blood_alcohol("male", 80, [(5, 355, 1, 24)], "light")
        self.assertEqual(result["bac"], 0)

    def test_food_lowers_bac(self):
        drinks = [(40, 44, 3, 0)]
        empty = formulas.blood_alcohol("female", 60, drinks, "empty")["bac"]
        full = formulas.blood_alcohol("female", 60, drinks, "full")["bac"]
        self.assertGreater(empty, full)

    def test_impairment_levels(self):
        self.assertEqual(formulas.impairment_level(0.01), "No impairment")
        self.assertEqual(formulas.impairment_level(0.05), "Mild impairment")
        self.assertEqual(formulas.impairment_level(0.5), "Life-threatening")


if __name__ == "__main__":
    unittest.main()
