"""
Formula library for the calculator hub.
Pure functions only: no Flask, no I/O, no state kept between calls.
Functions marked "caller validates" trust their inputs; the handlers in
app/projects/calculators/handlers.py do the checking.
"""
import calendar
import math
import re
import secrets
import string
from datetime import date, timedelta
from math import factorial

MAX_FACTORIAL_N = 170

BMI_THRESHOLDS = [
    (16.5, "Severely Underweight", "bg-blue-700"),
    (18.5, "Underweight", "bg-blue-500"),
    (25, "Normal", "bg-green-500"),
    (30, "Overweight", "bg-yellow-500"),
    (35, "Obese (Class I)", "bg-orange-500"),
    (40, "Obese (Class II)", "bg-red-500"),
]
BMI_TOP_CATEGORY = ("Obese (Class III)", "bg-purple-500")

COMPOUNDS_PER_YEAR = {
    "annually": 1,
    "semiannually": 2,
    "quarterly": 4,
    "monthly": 12,
    "daily": 365,
}

CONTRIBUTIONS_PER_YEAR = {
    "none": 0,
    "annually": 1,
    "monthly": 12,
    "biweekly": 26,
    "weekly": 52,
}


# --- Mortgage ---

def _growth_minus_one(rate, periods):
    # (1 + rate)^periods - 1 without losing precision for tiny rates
    return math.expm1(periods * math.log1p(rate))


def mortgage_payment(loan_amount: float, monthly_rate: float, num_payments: int) -> float:
    """Monthly principal + interest payment. Caller validates num_payments > 0."""
    if monthly_rate == 0:
        return loan_amount / num_payments
    growth_minus_one = _growth_minus_one(monthly_rate, num_payments)
    return loan_amount * monthly_rate * ((growth_minus_one + 1) / growth_minus_one)


def remaining_balance(loan_amount, monthly_rate, num_payments, payments_made):
    """Balance left on the loan after `payments_made` monthly payments."""
    if payments_made >= num_payments:
        return 0.0
    if monthly_rate == 0:
        return loan_amount * (1 - payments_made / num_payments)
    total_growth = _growth_minus_one(monthly_rate, num_payments)
    elapsed_growth = _growth_minus_one(monthly_rate, payments_made)
    balance = loan_amount * ((total_growth - elapsed_growth) / total_growth)
    return max(0.0, balance)


def amortization_schedule(loan_amount, monthly_rate, years):
    """
    Yearly snapshots of the loan.

    Returns:
        list: dicts with 'year', 'balance' and 'paid' (principal repaid so far),
              starting at year 0.
    """
    num_payments = years * 12
    schedule = []
    for year in range(years + 1):
        balance = remaining_balance(loan_amount, monthly_rate, num_payments, year * 12)
        schedule.append({
            "year": year,
            "balance": round(balance, 2),
            "paid": round(loan_amount - balance, 2),
        })
    return schedule


# --- BMI ---

def bmi(weight: float, height: float) -> float:
    """Metric BMI (kg, metres). Returns 0 for non-positive inputs."""
    if height <= 0 or weight <= 0:
        return 0
    return weight / (height * height)


def bmi_imperial(weight_lbs: float, height_inches: float) -> float:
    """Imperial BMI (pounds, inches). Returns 0 for non-positive inputs."""
    if height_inches <= 0 or weight_lbs <= 0:
        return 0
    return (weight_lbs / (height_inches * height_inches)) * 703


def bmi_category(value: float) -> str:
    for threshold, category, _ in BMI_THRESHOLDS:
        if value < threshold:
            return category
    return BMI_TOP_CATEGORY[0]


def bmi_color(value: float) -> str:
    for threshold, _, color in BMI_THRESHOLDS:
        if value < threshold:
            return color
    return BMI_TOP_CATEGORY[1]


# --- Age ---

def _days_in_previous_month(year, month):
    if month == 1:
        return calendar.monthrange(year - 1, 12)[1], year - 1, 12
    return calendar.monthrange(year, month - 1)[1], year, month - 1


def _birthday_in_year(birth_date: date, year: int) -> date:
    # Feb 29 birthdays are celebrated on Feb 28 in common years
    day = min(birth_date.day, calendar.monthrange(year, birth_date.month)[1])
    return date(year, birth_date.month, day)


def calendar_difference(earlier: date, later: date) -> dict:
    """
    Whole years, months and days from `earlier` to `later`.

    A negative day difference borrows the length of the month before `later`'s
    month (repeating for short months). A negative month difference, or a zero
    month difference with negative days, borrows a year.
    Caller validates earlier <= later.
    """
    years = later.year - earlier.year
    months = later.month - earlier.month
    days = later.day - earlier.day

    if months < 0 or (months == 0 and days < 0):
        years -= 1
        months += 12

    borrow_year, borrow_month = later.year, later.month
    while days < 0:
        month_days, borrow_year, borrow_month = _days_in_previous_month(borrow_year, borrow_month)
        days += month_days
        months -= 1

    total_days = (later - earlier).days
    return {
        "years": years,
        "months": months,
        "days": days,
        "total_months": years * 12 + months,
        "total_days": total_days,
        "total_weeks": total_days // 7,
    }


def age_breakdown(birth_date: date, as_of: date) -> dict:
    """
    Age between two dates in whole years, months and days (see
    calendar_difference), plus the next birthday on or after `as_of`.
    Caller validates birth_date <= as_of.

    Returns:
        dict: years, months, days, total_months, total_days, total_weeks,
              next_birthday (date, None past the end of the calendar) and
              days_until_birthday.
    """
    age = calendar_difference(birth_date, as_of)

    next_year = as_of.year
    if (birth_date.month, birth_date.day) < (as_of.month, as_of.day):
        next_year += 1
    next_birthday = None
    if next_year <= date.max.year:
        next_birthday = _birthday_in_year(birth_date, next_year)

    age["next_birthday"] = next_birthday
    age["days_until_birthday"] = (next_birthday - as_of).days if next_birthday else None
    return age


# --- Fractions ---

def make_fraction(numerator: int, denominator: int) -> dict:
    return {"numerator": numerator, "denominator": denominator}


def simplify_fraction(fraction: dict) -> dict:
    """Reduce to lowest terms with the sign carried by the numerator."""
    numerator = fraction["numerator"]
    denominator = fraction["denominator"]
    if denominator < 0:
        numerator, denominator = -numerator, -denominator
    divisor = math.gcd(abs(numerator), denominator) or 1
    return make_fraction(numerator // divisor, denominator // divisor)


def add_fractions(a: dict, b: dict) -> dict:
    numerator = a["numerator"] * b["denominator"] + b["numerator"] * a["denominator"]
    denominator = a["denominator"] * b["denominator"]
    return simplify_fraction(make_fraction(numerator, denominator))


def subtract_fractions(a: dict, b: dict) -> dict:
    numerator = a["numerator"] * b["denominator"] - b["numerator"] * a["denominator"]
    denominator = a["denominator"] * b["denominator"]
    return simplify_fraction(make_fraction(numerator, denominator))


def multiply_fractions(a: dict, b: dict) -> dict:
    numerator = a["numerator"] * b["numerator"]
    denominator = a["denominator"] * b["denominator"]
    return simplify_fraction(make_fraction(numerator, denominator))


def divide_fractions(a: dict, b: dict) -> dict:
    """Caller validates b's numerator is non-zero."""
    numerator = a["numerator"] * b["denominator"]
    denominator = a["denominator"] * b["numerator"]
    return simplify_fraction(make_fraction(numerator, denominator))


FRACTION_OPERATIONS = {
    "add": add_fractions,
    "subtract": subtract_fractions,
    "multiply": multiply_fractions,
    "divide": divide_fractions,
}


def format_fraction(fraction: dict) -> str:
    """'3', '-1 1/2' (mixed number) or '3/4'."""
    numerator = fraction["numerator"]
    denominator = fraction["denominator"]
    if denominator == 1:
        return f"{numerator}"
    if abs(numerator) > denominator:
        whole, remainder = divmod(abs(numerator), denominator)
        sign = "-" if numerator < 0 else ""
        if remainder == 0:
            return f"{sign}{whole}"
        return f"{sign}{whole} {remainder}/{denominator}"
    return f"{numerator}/{denominator}"


# --- Permutations & combinations ---

def permutation(n: int, r: int) -> int:
    """nPr. Caller validates 0 <= r and n <= MAX_FACTORIAL_N."""
    if n < r:
        return 0
    return factorial(n) // factorial(n - r)


def combination(n: int, r: int) -> int:
    """nCr. Caller validates 0 <= r and n <= MAX_FACTORIAL_N."""
    if n < r:
        return 0
    return factorial(n) // (factorial(r) * factorial(n - r))


# --- Quadratic equations ---

def solve_quadratic(a: float, b: float, c: float) -> dict:
    """
    Roots of ax² + bx + c = 0. Caller validates a != 0.

    Real roots are returned in root1/root2 (equal when repeated). Complex
    roots leave root1/root2 as None and describe the conjugate pair
    real_part ± imaginary_part·i.
    """
    discriminant = b * b - 4 * a * c
    result = {
        "discriminant": discriminant,
        "root1": None,
        "root2": None,
        "real_part": None,
        "imaginary_part": None,
        "has_real_roots": False,
        "has_complex_roots": False,
    }

    if discriminant > 0:
        root = math.sqrt(discriminant)
        result["root1"] = (-b + root) / (2 * a)
        result["root2"] = (-b - root) / (2 * a)
        result["has_real_roots"] = True
    elif discriminant == 0:
        # "or 0.0" folds -0.0 so it does not display as "-0"
        result["root1"] = result["root2"] = -b / (2 * a) or 0.0
        result["has_real_roots"] = True
    else:
        result["real_part"] = -b / (2 * a) or 0.0
        result["imaginary_part"] = abs(math.sqrt(-discriminant) / (2 * a))
        result["has_complex_roots"] = True

    return result


# --- Triangles ---

def triangle_area(base: float, height: float) -> float:
    return (base * height) / 2


def triangle_perimeter(a: float, b: float, c: float) -> float:
    return a + b + c


def is_valid_triangle(a: float, b: float, c: float) -> bool:
    """Positive sides that satisfy the strict triangle inequality."""
    if a <= 0 or b <= 0 or c <= 0:
        return False
    return a + b > c and a + c > b and b + c > a


def triangle_area_from_sides(a: float, b: float, c: float) -> float:
    """Heron's formula. Caller validates with is_valid_triangle first."""
    s = (a + b + c) / 2
    return math.sqrt(s * (s - a) * (s - b) * (s - c))


# --- Time sheets ---

def _minutes_since_midnight(value: str) -> int:
    hours, minutes = value.split(":")[:2]
    return int(hours) * 60 + int(minutes)


def timesheet_hours(start: str, end: str, break_minutes: float) -> float:
    """Hours worked between two HH:MM times, overnight shifts included."""
    if not start or not end:
        return 0
    start_minutes = _minutes_since_midnight(start)
    end_minutes = _minutes_since_midnight(end)

    if end_minutes < start_minutes:
        end_minutes += 24 * 60

    worked = end_minutes - start_minutes - break_minutes
    return max(0, round(worked / 60, 2))


# --- Percentages ---

def percent_of(percentage: float, base: float) -> float:
    return (percentage / 100) * base


def percent_change(original: float, new: float) -> dict:
    """Caller validates original != 0."""
    change = new - original
    return {
        "percent_change": abs((change / original) * 100),
        "is_increase": new > original,
    }


def value_from_percentage(known_value: float, percentage: float) -> float:
    """The whole that `known_value` is `percentage`% of. Caller validates percentage != 0."""
    return (known_value * 100) / percentage


def reverse_percentage(final_value: float, applied_percentage: float) -> float:
    """Value before `applied_percentage`% was added to reach `final_value`."""
    return final_value / (1 + applied_percentage / 100)


# --- Statistics ---

def parse_numbers(text: str) -> list:
    """Numbers from comma/whitespace separated text; unparseable tokens are dropped."""
    values = []
    for token in re.split(r"[,\s]+", text or ""):
        if not token:
            continue
        try:
            value = float(token)
        except ValueError:
            continue
        if math.isfinite(value):
            values.append(value)
    return values


def mean(values) -> float:
    if not values:
        return 0
    return sum(values) / len(values)


def median(values) -> float:
    if not values:
        return 0
    ordered = sorted(values)
    middle = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[middle - 1] + ordered[middle]) / 2
    return ordered[middle]


def variance(values, population=False) -> float:
    """Sample variance (n - 1) by default, population variance (n) on request."""
    if len(values) <= 1:
        return 0
    average = mean(values)
    sum_of_squares = sum((value - average) ** 2 for value in values)
    if population:
        return sum_of_squares / len(values)
    return sum_of_squares / (len(values) - 1)


def standard_deviation(values, population=False) -> float:
    return math.sqrt(variance(values, population=population))


# --- Compound interest ---

def compound_interest(principal, annual_rate, years, compound_frequency="monthly",
                      contribution=0, contribution_frequency="none",
                      inflation_rate=0, include_inflation=False):
    """
    Grow `principal` for `years`, adding contributions each compounding period.

    Contributions are spread evenly over compounding periods. Values are
    rounded to whole currency units, matching the yearly breakdown.
    """
    rate = annual_rate / 100
    compounds = COMPOUNDS_PER_YEAR.get(compound_frequency, 1)
    contributions = CONTRIBUTIONS_PER_YEAR.get(contribution_frequency, 0)

    per_period = (contribution * contributions) / compounds if contributions > 0 else 0
    total_periods = compounds * years

    balance = principal
    total_contributions = principal
    yearly = []

    for period in range(1, total_periods + 1):
        balance = balance * (1 + rate / compounds)
        balance += per_period
        total_contributions += per_period

        if period % compounds == 0:
            year = period // compounds
            inflation_factor = math.pow(1 + inflation_rate / 100, year) if include_inflation else 1
            yearly.append({
                "year": year,
                "balance": round(balance),
                "contributions": round(total_contributions),
                "interest": round(balance - total_contributions),
                "inflation_adjusted": round(balance / inflation_factor),
            })

    inflation_factor = math.pow(1 + inflation_rate / 100, years) if include_inflation else 1
    return {
        "future_value": round(balance),
        "total_contributions": round(total_contributions),
        "interest_earned": round(balance - total_contributions),
        "inflation_adjusted": round(balance / inflation_factor),
        "yearly": yearly,
    }


# --- Pets ---

def pet_human_age(pet_type: str, age: float, weight_lbs: float = 0) -> float:
    """
    Human-equivalent age: 15 years for the first year, 9 for the second,
    then 4/5/6 per year for small/medium/large dogs and 4 per year for cats.
    """
    if age <= 1:
        return age * 15
    if age <= 2:
        return 15 + (age - 1) * 9

    if pet_type == "dog":
        if weight_lbs < 10:
            per_year = 4
        elif weight_lbs < 50:
            per_year = 5
        else:
            per_year = 6
    else:
        per_year = 4
    return 24 + (age - 2) * per_year


# --- Loans ---

def loan_schedule(principal, monthly_rate, num_payments, payment, extra_payment=0):
    """
    Month-by-month repayment with an optional extra amount paid each month,
    summarised per year.

    Returns:
        dict: 'yearly' rows (year, principal, interest, balance), 'total_interest',
              'total_paid' and 'months' (payments actually made).
    """
    balance = principal
    total_interest = 0
    total_paid = 0
    yearly = []
    year_principal = 0
    year_interest = 0
    month = 0

    while balance > 0.005 and month < num_payments:
        month += 1
        interest = balance * monthly_rate
        principal_paid = min(payment + extra_payment - interest, balance)
        balance -= principal_paid
        total_interest += interest
        total_paid += principal_paid + interest
        year_principal += principal_paid
        year_interest += interest

        if month % 12 == 0 or balance <= 0.005 or month == num_payments:
            yearly.append({
                "year": math.ceil(month / 12),
                "principal": year_principal,
                "interest": year_interest,
                "balance": max(0.0, balance),
            })
            year_principal = 0
            year_interest = 0

    return {
        "yearly": yearly,
        "total_interest": total_interest,
        "total_paid": total_paid,
        "months": month,
    }


# --- Simple and compound interest ---

def simple_interest_growth(principal, annual_rate, years, annual_contribution=0):
    """
    Yearly balances for A = P(1 + rt).

    Contributions arrive evenly through each year, so on average they earn
    interest for half of the elapsed time.
    """
    rate = annual_rate / 100
    rows = []
    for year in range(years + 1):
        contributed = annual_contribution * year
        balance = principal * (1 + rate * year) + contributed + contributed * rate * (year / 2)
        rows.append({"year": year, "balance": balance, "deposited": principal + contributed})
    return rows


def compound_interest_growth(principal, annual_rate, years, compounds_per_year, annual_contribution=0):
    """
    Yearly balances for A = P(1 + r/n)^(nt), plus the future value of the
    contributions spread evenly over the n compounding periods of a year.
    """
    periodic_rate = annual_rate / 100 / compounds_per_year
    deposit = annual_contribution / compounds_per_year
    rows = []
    for year in range(years + 1):
        periods = compounds_per_year * year
        if periodic_rate:
            growth_minus_one = _growth_minus_one(periodic_rate, periods)
            balance = principal * (growth_minus_one + 1) + deposit * (growth_minus_one / periodic_rate)
        else:
            balance = principal + deposit * periods
        rows.append({"year": year, "balance": balance, "deposited": principal + annual_contribution * year})
    return rows


# --- Credit card payoff ---

def card_payoff_months(balance, monthly_rate, payment):
    """
    Months needed to clear `balance` with a fixed monthly payment:
    n = -log(1 - rB/P) / log(1 + r). Caller validates payment > balance * monthly_rate.
    """
    if monthly_rate == 0:
        return math.ceil(balance / payment)
    months = -math.log1p(-monthly_rate * balance / payment) / math.log1p(monthly_rate)
    return max(1, math.ceil(round(months, 9)))


def card_payment_for_months(balance, monthly_rate, months):
    """Fixed payment, rounded up to the cent, that clears `balance` in `months`."""
    payment = mortgage_payment(balance, monthly_rate, months)
    return math.ceil(payment * 100) / 100


def card_payoff_schedule(balance, monthly_rate, payment, months):
    """Monthly rows of payment, interest, principal and remaining balance."""
    rows = []
    remaining = balance
    for month in range(1, months + 1):
        interest = remaining * monthly_rate
        principal_paid = payment - interest
        actual_payment = payment
        # The final payment only covers what is left
        if principal_paid > remaining:
            principal_paid = remaining
            actual_payment = principal_paid + interest
        remaining -= principal_paid
        rows.append({
            "month": month,
            "payment": actual_payment,
            "interest": interest,
            "principal": principal_paid,
            "balance": max(0.0, remaining),
        })
        if remaining < 0.01:
            break
    return rows


# --- Retirement ---

def inflate(amount, inflation_rate, years):
    return amount * math.pow(1 + inflation_rate / 100, years)


def retirement_goal(annual_expenses_at_retirement, years_in_retirement, retirement_return):
    """
    Lump sum needed at retirement to fund monthly withdrawals for
    `years_in_retirement`: PV = PMT * (1 - (1 + r)^-n) / r.
    """
    monthly_rate = retirement_return / 100 / 12
    payments = years_in_retirement * 12
    monthly_expenses = annual_expenses_at_retirement / 12
    if monthly_rate == 0:
        return monthly_expenses * payments
    return monthly_expenses * -_growth_minus_one(monthly_rate, -payments) / monthly_rate


def retirement_savings(current_age, years, current_savings, monthly_contribution, annual_return):
    """
    Savings balance by age until retirement, contributing monthly and
    compounding monthly.
    """
    monthly_rate = annual_return / 100 / 12
    balance = current_savings
    contributions = 0
    interest = 0
    rows = [{"age": current_age, "savings": balance, "contributions": 0, "interest": 0}]

    for year in range(1, years + 1):
        for _ in range(12):
            balance += monthly_contribution
            contributions += monthly_contribution
            earned = balance * monthly_rate
            balance += earned
            interest += earned
        rows.append({
            "age": current_age + year,
            "savings": balance,
            "contributions": contributions,
            "interest": interest,
        })
    return rows


def retirement_withdrawals(starting_balance, retirement_age, years_in_retirement,
                           annual_expenses_at_retirement, inflation_rate, retirement_return):
    """
    Balance by age while drawing down savings. Expenses keep rising with
    inflation; the schedule stops early once the money runs out.
    """
    monthly_rate = retirement_return / 100 / 12
    balance = starting_balance
    expenses = annual_expenses_at_retirement
    rows = []

    for year in range(1, years_in_retirement + 1):
        expenses *= 1 + inflation_rate / 100
        for _ in range(12):
            balance -= expenses / 12
            if balance <= 0:
                balance = 0
                break
            balance += balance * monthly_rate
        rows.append({"age": retirement_age + year, "savings": balance, "withdrawal": expenses})
        if balance <= 0:
            break
    return rows


def monthly_saving_for(target, annual_return, years):
    """Monthly deposit that grows to `target` in `years`: PMT = FV * r / ((1 + r)^n - 1)."""
    monthly_rate = annual_return / 100 / 12
    months = years * 12
    if target <= 0 or months <= 0:
        return 0
    if monthly_rate == 0:
        return target / months
    return target * (monthly_rate / _growth_minus_one(monthly_rate, months))


# --- Investments ---

def investment_growth(initial, monthly_contribution, annual_rate, years, periods_per_year):
    """
    Yearly value of an investment. Monthly contributions are pooled per
    compounding period and added before that period's interest.
    """
    periodic_rate = annual_rate / 100 / periods_per_year
    deposit = monthly_contribution * 12 / periods_per_year
    value = initial
    invested = initial
    rows = [{"year": 0, "value": value, "invested": invested, "interest": 0}]

    for period in range(1, periods_per_year * years + 1):
        value += deposit
        invested += deposit
        value += value * periodic_rate
        if period % periods_per_year == 0:
            rows.append({
                "year": period // periods_per_year,
                "value": value,
                "invested": invested,
                "interest": value - invested,
            })
    return rows


# --- Calories ---

ACTIVITY_MULTIPLIERS = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "very_active": 1.9,
}

GOAL_ADJUSTMENTS = {"lose": -500, "maintain": 0, "gain": 500}

# Protein, carbohydrate and fat shares of the daily calories
MACRO_SPLITS = {
    "lose": (0.4, 0.3, 0.3),
    "maintain": (0.3, 0.4, 0.3),
    "gain": (0.25, 0.5, 0.25),
}

CALORIES_PER_KG = 7700
LBS_TO_KG = 0.453592
INCHES_TO_CM = 2.54


def bmr_mifflin_st_jeor(gender, weight_kg, height_cm, age):
    """Basal metabolic rate in calories per day."""
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    if gender == "male":
        return base + 5
    return base - 161


def daily_calories(gender, weight_kg, height_cm, age, activity, goal):
    """BMR, total daily energy expenditure and the calorie target for `goal`."""
    bmr = bmr_mifflin_st_jeor(gender, weight_kg, height_cm, age)
    tdee = round(bmr * ACTIVITY_MULTIPLIERS[activity])
    return {
        "bmr": round(bmr),
        "tdee": tdee,
        "calories": tdee + GOAL_ADJUSTMENTS[goal],
    }


def macro_grams(calories, goal):
    """Grams of protein and carbohydrate (4 cal/g) and fat (9 cal/g)."""
    protein, carbs, fat = MACRO_SPLITS[goal]
    return {
        "protein": round(calories * protein / 4),
        "carbs": round(calories * carbs / 4),
        "fat": round(calories * fat / 9),
    }


def weight_change_kg(daily_difference, days):
    return abs(daily_difference) * days / CALORIES_PER_KG


# --- Body fat ---

BODY_FAT_LIMITS = (2, 60)

BODY_FAT_CATEGORIES = {
    "male": [(6, "Essential Fat"), (14, "Athletic"), (18, "Fitness"), (25, "Average")],
    "female": [(14, "Essential Fat"), (21, "Athletic"), (25, "Fitness"), (32, "Average")],
}


def body_fat_navy(gender, height_cm, waist_cm, neck_cm, hip_cm=0):
    """U.S. Navy circumference method. Caller validates the log arguments are positive."""
    if gender == "male":
        density = 1.0324 - 0.19077 * math.log10(waist_cm - neck_cm) + 0.15456 * math.log10(height_cm)
    else:
        density = 1.29579 - 0.35004 * math.log10(waist_cm + hip_cm - neck_cm) + 0.22100 * math.log10(height_cm)
    return 495 / density - 450


def body_fat_skinfold(gender, age, skinfold_sum):
    """Jackson-Pollock 3-site method, skinfolds in millimetres."""
    if gender == "male":
        density = 1.10938 - 0.0008267 * skinfold_sum + 0.0000016 * skinfold_sum ** 2 - 0.0002574 * age
    else:
        density = 1.099421 - 0.0009929 * skinfold_sum + 0.0000023 * skinfold_sum ** 2 - 0.0001392 * age
    return (4.95 / density - 4.5) * 100


def body_fat_from_bmi(gender, bmi_value, age):
    """Rough estimate from BMI and age."""
    if gender == "male":
        return 1.20 * bmi_value + 0.23 * age - 16.2
    return 1.20 * bmi_value + 0.23 * age - 5.4


def body_fat_category(gender, percent):
    for threshold, category in BODY_FAT_CATEGORIES[gender]:
        if percent < threshold:
            return category
    return "Obese"


# --- Pregnancy ---

GESTATION_DAYS = 280
FIRST_TRIMESTER_DAYS = 91
SECOND_TRIMESTER_DAYS = 182


def pregnancy_dates(known_date: date, method: str, cycle_length: int = 28, today: date = None) -> dict:
    """
    Key dates from the first day of the last period ('lmp') or from the
    conception date ('conception').

    Gestational age is counted from an effective period start 280 days before
    the due date, so a longer cycle moves every milestone later. When `today`
    is given, 'weeks', 'days' and 'trimester' describe progress on that day
    (trimester None once the due date has passed).
    """
    if method == "conception":
        conception = known_date
        due_date = conception + timedelta(days=GESTATION_DAYS - 14)
    else:
        conception = known_date + timedelta(days=cycle_length - 14)
        due_date = known_date + timedelta(days=GESTATION_DAYS + cycle_length - 28)

    start = due_date - timedelta(days=GESTATION_DAYS)
    result = {
        "conception": conception,
        "due_date": due_date,
        "first_trimester_end": start + timedelta(days=FIRST_TRIMESTER_DAYS),
        "second_trimester_end": start + timedelta(days=SECOND_TRIMESTER_DAYS),
        "weeks": None,
        "days": None,
        "trimester": None,
    }

    if today is not None:
        elapsed = max(0, (today - start).days)
        result["weeks"], result["days"] = divmod(elapsed, 7)
        if today <= result["first_trimester_end"]:
            result["trimester"] = 1
        elif today <= result["second_trimester_end"]:
            result["trimester"] = 2
        elif today <= due_date:
            result["trimester"] = 3
    return result


# --- Dates ---

DATE_UNITS = ("days", "weeks", "months", "years")


def date_difference(start: date, end: date) -> dict:
    """Calendar difference between two dates, in either order."""
    earlier, later = sorted((start, end))
    difference = calendar_difference(earlier, later)
    difference["end_before_start"] = end < start
    return difference


def _add_months(value: date, months: int) -> date:
    # Day is clamped to the length of the target month (Jan 31 + 1 month = Feb 28/29)
    year, month_index = divmod(value.year * 12 + value.month - 1 + months, 12)
    day = min(value.day, calendar.monthrange(year, month_index + 1)[1])
    return date(year, month_index + 1, day)


def shift_date(value: date, amount: int, unit: str) -> date:
    """
    Move `value` by `amount` days, weeks, months or years (negative moves back).

    Raises ValueError or OverflowError when the result falls outside the calendar.
    """
    if unit == "days":
        return value + timedelta(days=amount)
    if unit == "weeks":
        return value + timedelta(weeks=amount)
    if unit == "months":
        return _add_months(value, amount)
    return _add_months(value, amount * 12)


# --- Time ---

def to_seconds(hours: int, minutes: int, seconds: int) -> int:
    return hours * 3600 + minutes * 60 + seconds


def format_clock(total_seconds: int) -> str:
    """'HH:MM:SS', with a leading '-' for negative durations."""
    sign = "-" if total_seconds < 0 else ""
    hours, remainder = divmod(abs(total_seconds), 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{sign}{hours:02d}:{minutes:02d}:{seconds:02d}"


def _plural(count, word):
    return f"{count} {word}{'' if count == 1 else 's'}"


def describe_duration(total_seconds: int) -> str:
    """'1 hour 5 minutes 3 seconds'; leading zero units are left out."""
    hours, remainder = divmod(abs(total_seconds), 3600)
    minutes, seconds = divmod(remainder, 60)
    parts = []
    if hours > 0:
        parts.append(_plural(hours, "hour"))
    if minutes > 0 or hours > 0:
        parts.append(_plural(minutes, "minute"))
    parts.append(_plural(seconds, "second"))
    return " ".join(parts)


# --- GPA ---

GRADES = [
    ("a+", "A+", 4.0),
    ("a", "A", 4.0),
    ("a-", "A-", 3.7),
    ("b+", "B+", 3.3),
    ("b", "B", 3.0),
    ("b-", "B-", 2.7),
    ("c+", "C+", 2.3),
    ("c", "C", 2.0),
    ("c-", "C-", 1.7),
    ("d+", "D+", 1.3),
    ("d", "D", 1.0),
    ("d-", "D-", 0.7),
    ("f", "F", 0.0),
]
GRADE_POINTS = {value: points for value, _, points in GRADES}
CREDIT_HOURS = [1, 2, 3, 4, 5, 6]

GPA_LETTERS = [
    (4.0, "A"), (3.7, "A-"), (3.3, "B+"), (3.0, "B"), (2.7, "B-"), (2.3, "C+"),
    (2.0, "C"), (1.7, "C-"), (1.3, "D+"), (1.0, "D"), (0.7, "D-"),
]


def grade_point_average(courses) -> dict:
    """
    Credit-weighted GPA.

    Args:
        courses: iterable of (grade, credits) pairs; unknown grades are skipped

    Returns:
        dict: 'gpa', 'total_credits' and 'total_points'
    """
    total_points = 0
    total_credits = 0
    for grade, credits in courses:
        if grade in GRADE_POINTS:
            total_points += GRADE_POINTS[grade] * credits
            total_credits += credits
    gpa = total_points / total_credits if total_credits > 0 else 0
    return {"gpa": gpa, "total_credits": total_credits, "total_points": total_points}


def gpa_letter(value: float) -> str:
    for threshold, letter in GPA_LETTERS:
        if value >= threshold:
            return letter
    return "F"


def gpa_message(value: float) -> str:
    if value >= 3.5:
        return "Excellent! You're doing very well, keep up the good work!"
    if value >= 3.0:
        return "Good job! You're performing well above average."
    if value >= 2.0:
        return "You're doing okay, but there's room for improvement."
    return "You may need to focus more on your studies to improve your GPA."


# --- Passwords ---

PASSWORD_CHARACTER_SETS = {
    "uppercase": string.ascii_uppercase,
    "lowercase": string.ascii_lowercase,
    "numbers": string.digits,
    "symbols": "!@#$%^&*()_+-=[]{}|;:,.<>?",
}
PASSWORD_LENGTH_RANGE = (8, 32)


def generate_password(length: int, character_sets, rng=None) -> str:
    """
    Random password with at least one character from each chosen set and the
    rest drawn from all of them. Caller validates length >= len(character_sets).
    """
    rng = rng or secrets.SystemRandom()
    pool = "".join(character_sets)
    characters = [rng.choice(chars) for chars in character_sets]
    characters += [rng.choice(pool) for _ in range(length - len(characters))]
    rng.shuffle(characters)
    return "".join(characters)


def password_strength(length: int, set_count: int) -> int:
    """0-100: up to 40 points for length, 15 per character set."""
    return min(40, length * 2) + 15 * set_count


def password_strength_label(score: int) -> str:
    if score < 30:
        return "Very Weak"
    if score < 50:
        return "Weak"
    if score < 70:
        return "Moderate"
    if score < 90:
        return "Strong"
    return "Very Strong"


# --- Love ---

LOVE_MESSAGES = [
    (90, "Soulmates! A match made in heaven."),
    (80, "Very strong connection. True love potential!"),
    (70, "Great match! You have a bright future together."),
    (60, "Good compatibility. Worth pursuing this relationship."),
    (50, "Average compatibility. Could work with some effort."),
    (40, "Some challenges ahead, but don't give up!"),
    (30, "Might need to work harder on this relationship."),
    (20, "Quite difficult. Friendship might be better."),
]


def love_score(name1: str, name2: str) -> int:
    """
    1-100 score from the letters of both names. The same pair of names
    always scores the same, in either order.
    """
    combined = (name1.strip() + name2.strip()).lower()
    love_letters = sum(1 for char in combined if char in "love")
    base = min(100, max(40, love_letters * 10 + (len(combined) % 10) * 5))
    # Nudge of -10..+9 points taken from the letters themselves
    nudge = sum(ord(char) for char in combined) % 20 - 10
    return min(100, max(1, base + nudge))


def love_message(score: int) -> str:
    for threshold, message in LOVE_MESSAGES:
        if score >= threshold:
            return message
    return "Not the best match. But love can overcome anything!"


# --- Binge watching ---

def binge_watch_time(seasons, episodes_per_season, episode_minutes, hours_per_day, intro_seconds=0):
    """Total viewing time for a series when skipping `intro_seconds` per episode."""
    episodes = seasons * episodes_per_season
    hours = episodes * (episode_minutes - intro_seconds / 60) / 60
    days = hours / hours_per_day
    return {
        "episodes": episodes,
        "hours": hours,
        "days": days,
        "weeks": days / 7,
        "episodes_per_day": hours_per_day * 60 / episode_minutes,
        "intro_hours_saved": episodes * intro_seconds / 3600,
    }


def format_hours_minutes(hours: float) -> str:
    """'2 hours 30 minutes', '1 hour' or '45 minutes'."""
    whole_hours = math.floor(hours)
    minutes = round((hours - whole_hours) * 60)
    if minutes == 60:
        whole_hours += 1
        minutes = 0
    hour_text = f"{whole_hours} {'hour' if whole_hours == 1 else 'hours'}"
    if whole_hours == 0:
        return f"{minutes} minutes"
    if minutes == 0:
        return hour_text
    return f"{hour_text} {minutes} minutes"


# --- Lucky numbers ---

# number: (colour, day, gemstone, meaning)
LUCKY_TRAITS = {
    1: ("Red", "Sunday", "Ruby",
        "Leadership, independence, and individuality. You are likely to be a pioneer and innovator."),
    2: ("Orange", "Monday", "Moonstone",
        "Harmony, diplomacy, and cooperation. You excel in partnerships and creating balance."),
    3: ("Yellow", "Tuesday", "Citrine",
        "Creativity, self-expression, and joy. You have a natural ability to inspire others."),
    4: ("Green", "Wednesday", "Emerald",
        "Stability, practicality, and hard work. You build solid foundations in life."),
    5: ("Blue", "Thursday", "Sapphire",
        "Freedom, adaptability, and adventure. You embrace change and new experiences."),
    6: ("Indigo", "Friday", "Diamond",
        "Nurturing, responsibility, and service. You care deeply for others and your community."),
    7: ("Violet", "Saturday", "Amethyst",
        "Spirituality, analysis, and wisdom. You seek deeper understanding and meaning."),
    8: ("Pink", "Sunday", "Jade",
        "Ambition, success, and material abundance. You have the ability to manifest wealth."),
    9: ("Gold", "Monday", "Topaz",
        "Compassion, humanitarianism, and completion. You see the big picture in life."),
}


def lucky_number(name: str, birth_date: date) -> int:
    """
    Numerology number 1-9: letter positions of the name (a=1 ... z=26) plus
    the digits of the birth date, reduced modulo 9 with 0 counted as 9.
    """
    name_value = sum(ord(char) - 96 for char in name.lower() if "a" <= char <= "z")
    digits = f"{birth_date.day:02d}{birth_date.month:02d}{birth_date.year:04d}"
    date_value = sum(int(digit) for digit in digits)
    return (name_value + date_value) % 9 or 9


# --- Calorie burn ---

# MET (metabolic equivalent of task) values
ACTIVITY_METS = {
    "Walking (3 mph)": 3.5,
    "Running (6 mph)": 10.0,
    "Cycling (moderate)": 8.0,
    "Swimming (moderate)": 7.0,
    "Weight Training": 3.5,
    "Yoga": 2.5,
    "Dancing": 4.5,
    "Hiking": 6.0,
    "Basketball": 6.5,
    "Tennis": 7.0,
    "Soccer": 7.0,
    "Rowing": 7.0,
    "Elliptical Trainer": 5.0,
    "Aerobics": 7.0,
    "Pilates": 3.0,
    "Skiing": 7.0,
    "Gardening": 3.5,
    "House Cleaning": 3.0,
    "Stair Climbing": 4.0,
    "Jumping Rope": 10.0,
}


def activity_calories(met: float, weight_kg: float, minutes: float) -> float:
    """Calories burned = MET x weight (kg) x duration (hours)."""
    return met * weight_kg * minutes / 60


# --- Blood alcohol ---

# id: (name, typical ABV %, serving size ml)
DRINK_TYPES = {
    "beer": ("Beer", 5, 355),
    "wine": ("Wine", 12, 148),
    "liquor": ("Liquor/Spirits", 40, 44),
    "cocktail": ("Cocktail", 15, 207),
    "cider": ("Hard Cider", 6, 355),
    "malt": ("Malt Beverage", 7, 355),
    "custom": ("Custom Drink", 0, 0),
}

# gender: (body water ratio, elimination per hour)
BAC_GENDER_FACTORS = {
    "male": (0.58, 0.015),
    "female": (0.49, 0.017),
}

FOOD_FACTORS = {"empty": 0.85, "light": 1.0, "full": 1.2}
ALCOHOL_DENSITY = 0.789

BAC_LEVELS = [
    (0.02, "No impairment"),
    (0.04, "Subtle effects"),
    (0.08, "Mild impairment"),
    (0.15, "Significant impairment"),
    (0.30, "Severe impairment"),
]


def blood_alcohol(gender, weight_kg, drinks, food_intake="light"):
    """
    Widmark estimate of blood alcohol content.

    Args:
        drinks: iterable of (abv_percent, serving_ml, quantity, hours_ago)

    Returns:
        dict: 'bac' (rounded to 3 places), 'alcohol_grams' still in the body
              and 'hours_to_sober'
    """
    water_ratio, elimination = BAC_GENDER_FACTORS[gender]
    body_water = weight_kg * water_ratio

    alcohol_grams = 0
    for abv, serving_ml, quantity, hours_ago in drinks:
        grams = serving_ml * (abv / 100) * quantity * ALCOHOL_DENSITY
        eliminated = elimination * hours_ago * body_water
        alcohol_grams += max(0, grams - eliminated)

    bac = round(alcohol_grams / (body_water * FOOD_FACTORS[food_intake]) / 10, 3)
    return {
        "bac": bac,
        "alcohol_grams": alcohol_grams,
        "hours_to_sober": bac / elimination,
    }


def impairment_level(bac: float) -> str:
    for threshold, level in BAC_LEVELS:
        if bac < threshold:
            return level
    return "Life-threatening"
