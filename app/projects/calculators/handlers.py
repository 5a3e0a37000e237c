"""
Calculator handlers: validate a submitted form, call the formula library and
shape the result for the shared template and the PDF report.

Every handler returns (result, error_message). result is None when
validation fails. A result dict always carries:
- 'summary': list of (label, display_value) pairs for the results pane
- 'table': optional {'title', 'columns', 'rows'} for a breakdown table
plus the raw values the handler computed.

Row actions (add/remove a time entry, course, activity or drink) take the
form and return an error message or None.
"""
import math
import re
from datetime import date, timedelta

from app.projects.calculators.core import conversions
from app.projects.calculators.core import expressions
from app.projects.calculators.core import formulas
from app.projects.calculators.forms import (
    DAYS_OF_WEEK,
    AgeForm,
    AlcoholForm,
    BingeWatchForm,
    BMIForm,
    BodyFatForm,
    CalorieBurnForm,
    CalorieForm,
    CompoundInterestForm,
    CreditCardPayoffForm,
    DateCalculatorForm,
    FractionForm,
    GPAForm,
    HoursForm,
    InterestForm,
    InvestmentForm,
    LoanForm,
    LoveForm,
    LuckyNumberForm,
    MortgageForm,
    PasswordForm,
    PercentageForm,
    PermutationCombinationForm,
    PetAgeForm,
    PregnancyForm,
    QuadraticForm,
    RetirementForm,
    ScientificForm,
    StatisticsForm,
    TimeCalculatorForm,
    TriangleForm,
    UnitConverterForm,
)
from app.utils.formatting import (
    format_compact,
    format_currency,
    format_date,
    format_date_with_weekday,
    format_money,
    format_number,
    to_title_case,
)

TIME_PATTERN = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")

TOO_LARGE = "Values are too large to calculate, please use smaller numbers"

MAX_COMPOUND_YEARS = 100
MAX_LOAN_TERM_YEARS = 50
MAX_PAYOFF_MONTHS = 600
MAX_PLANNING_AGE = 120
MAX_FRACTION_OPERAND = 10 ** 12
MAX_BREAK_MINUTES = 24 * 60
MAX_TIME_VALUE = 1_000_000
MAX_EPISODES = 100_000
MAX_EPISODE_MINUTES = 600
MAX_DRINK_QUANTITY = 100


def _finite(*values):
    return all(math.isfinite(value) for value in values)


def _count(value):
    """Large counts switch to scientific notation."""
    if value < 10 ** 15:
        return f"{value:,}"
    return f"{float(value):.6e}"


def _years_and_months(months):
    years, remainder = divmod(months, 12)
    parts = []
    if years:
        parts.append(f"{years} {'year' if years == 1 else 'years'}")
    if remainder or not years:
        parts.append(f"{remainder} {'month' if remainder == 1 else 'months'}")
    return " ".join(parts)


def _signed_term(coefficient, suffix):
    if coefficient == 0:
        return ""
    sign = " - " if coefficient < 0 else " + "
    magnitude = abs(coefficient)
    if suffix and magnitude == 1:
        return f"{sign}{suffix}"
    return f"{sign}{format_compact(magnitude)}{suffix}"


def format_equation(a, b, c):
    """'x² + 3x - 4 = 0' style rendering of a quadratic."""
    if a == 1:
        lead = "x²"
    elif a == -1:
        lead = "-x²"
    else:
        lead = f"{format_compact(a)}x²"
    return f"{lead}{_signed_term(b, 'x')}{_signed_term(c, '')} = 0"


def _remove_row(rows, noun, index=None):
    """Drop the row at position `index`, or the last row; one row always stays."""
    if len(rows) <= 1:
        return f"You must have at least one {noun}"
    if index is None:
        rows.pop_entry()
        return None
    try:
        position = int(index)
    except ValueError:
        return "That row no longer exists"
    if not 0 <= position < len(rows):
        return "That row no longer exists"
    del rows.entries[position]
    return None


# --- Financial ---

def calculate_mortgage(form):
    home_price = form.home_price.data
    down_payment = form.down_payment.data
    loan_term = form.loan_term.data
    interest_rate = form.interest_rate.data

    loan_amount = home_price - down_payment
    if loan_amount <= 0:
        return None, "Loan amount must be greater than zero"
    if loan_term <= 0:
        return None, "Loan term must be at least one year"
    if loan_term > MAX_LOAN_TERM_YEARS:
        return None, f"Loan term must be {MAX_LOAN_TERM_YEARS} years or fewer"
    if interest_rate < 0:
        return None, "Interest rate cannot be negative"

    monthly_rate = interest_rate / 100 / 12
    num_payments = loan_term * 12
    try:
        principal_and_interest = formulas.mortgage_payment(loan_amount, monthly_rate, num_payments)
        schedule = formulas.amortization_schedule(loan_amount, monthly_rate, loan_term)
    except OverflowError:
        return None, TOO_LARGE
    monthly_tax = (home_price * form.property_tax.data / 100) / 12
    monthly_insurance = form.home_insurance.data / 12
    monthly_payment = principal_and_interest + monthly_tax + monthly_insurance
    total_interest = principal_and_interest * num_payments - loan_amount
    down_payment_percent = (down_payment / home_price) * 100 if home_price > 0 else 0

    if not _finite(monthly_payment, total_interest, loan_amount + total_interest):
        return None, TOO_LARGE

    result = {
        "loan_amount": loan_amount,
        "principal_and_interest": principal_and_interest,
        "monthly_property_tax": monthly_tax,
        "monthly_insurance": monthly_insurance,
        "monthly_payment": monthly_payment,
        "total_interest": total_interest,
        "schedule": schedule,
        "summary": [
            ("Monthly Payment", format_currency(monthly_payment)),
            ("Principal & Interest", format_currency(principal_and_interest)),
            ("Property Tax", format_currency(monthly_tax)),
            ("Home Insurance", format_currency(monthly_insurance)),
            ("Loan Amount", format_currency(loan_amount)),
            ("Down Payment", f"{format_currency(down_payment)} ({format_number(down_payment_percent)}%)"),
            ("Total Interest Paid", format_currency(total_interest)),
            ("Total Cost of Loan", format_currency(loan_amount + total_interest)),
        ],
        "table": {
            "title": "Amortization by Year",
            "columns": ["Year", "Principal Paid", "Remaining Balance"],
            "rows": [
                [str(row["year"]), format_currency(row["paid"]), format_currency(row["balance"])]
                for row in schedule
            ],
        },
    }
    return result, None


def calculate_loan(form):
    loan_amount = form.loan_amount.data
    interest_rate = form.interest_rate.data
    loan_term = form.loan_term.data
    down_payment = form.down_payment.data
    extra_payment = form.extra_payment.data

    if loan_amount <= 0 or interest_rate <= 0 or loan_term <= 0:
        return None, "Please enter valid positive values for all fields"
    if loan_term > MAX_LOAN_TERM_YEARS:
        return None, f"Loan term must be {MAX_LOAN_TERM_YEARS} years or fewer"
    if down_payment < 0 or extra_payment < 0:
        return None, "Down payment and extra payment cannot be negative"
    principal = loan_amount - down_payment
    if principal <= 0:
        return None, "Loan amount must be greater than down payment"

    monthly_rate = interest_rate / 100 / 12
    num_payments = loan_term * 12
    try:
        payment = formulas.mortgage_payment(principal, monthly_rate, num_payments)
    except OverflowError:
        return None, TOO_LARGE
    standard = formulas.loan_schedule(principal, monthly_rate, num_payments, payment)
    schedule = formulas.loan_schedule(principal, monthly_rate, num_payments, payment, extra_payment)
    if not _finite(payment, standard["total_interest"], schedule["total_paid"]):
        return None, TOO_LARGE

    summary = [
        ("Monthly Payment", format_money(payment + extra_payment)),
        ("Total Payment", format_money(schedule["total_paid"])),
        ("Total Interest", format_money(schedule["total_interest"])),
        ("Principal", format_money(principal)),
        ("Down Payment", format_money(down_payment)),
    ]
    if extra_payment > 0:
        summary.append(("Interest Saved", format_money(standard["total_interest"] - schedule["total_interest"])))
        summary.append(("Time Saved", _years_and_months(standard["months"] - schedule["months"])))

    result = {
        "principal": principal,
        "monthly_payment": payment,
        "total_interest": schedule["total_interest"],
        "total_paid": schedule["total_paid"],
        "months": schedule["months"],
        "summary": summary,
        "table": {
            "title": "Amortization by Year",
            "columns": ["Year", "Principal", "Interest", "Balance"],
            "rows": [
                [str(row["year"]), format_money(row["principal"]), format_money(row["interest"]),
                 format_money(row["balance"])]
                for row in schedule["yearly"]
            ],
        },
    }
    return result, None


def calculate_interest(form):
    principal = form.principal.data
    interest_rate = form.interest_rate.data
    years = form.years.data
    contribution = form.annual_contribution.data
    simple = form.interest_type.data == "simple"

    if principal <= 0 or interest_rate <= 0 or years <= 0:
        return None, "Please enter valid positive values"
    if contribution < 0:
        return None, "Annual contribution cannot be negative"
    if years > MAX_COMPOUND_YEARS:
        return None, f"Years must be {MAX_COMPOUND_YEARS} or fewer"

    compounds = formulas.COMPOUNDS_PER_YEAR[form.compound_frequency.data]
    try:
        if simple:
            rows = formulas.simple_interest_growth(principal, interest_rate, years, contribution)
        else:
            rows = formulas.compound_interest_growth(principal, interest_rate, years, compounds, contribution)
        effective = math.pow(1 + interest_rate / 100 / compounds, compounds) - 1
    except OverflowError:
        return None, TOO_LARGE

    final = rows[-1]
    interest = final["balance"] - final["deposited"]
    if not _finite(final["balance"], interest):
        return None, TOO_LARGE

    summary = [
        ("Interest Type", "Simple" if simple else f"Compound ({form.compound_frequency.data})"),
        ("Final Amount", format_money(final["balance"])),
        ("Total Deposits", format_money(final["deposited"])),
        ("Interest Earned", format_money(interest)),
    ]
    if not simple:
        summary.append(("Effective Annual Rate", f"{format_number(effective * 100, 3)}%"))

    result = {
        "final_amount": final["balance"],
        "interest": interest,
        "yearly": rows,
        "summary": summary,
        "table": {
            "title": "Balance by Year",
            "columns": ["Year", "Balance", "Deposits", "Interest"],
            "rows": [
                [str(row["year"]), format_money(row["balance"]), format_money(row["deposited"]),
                 format_money(row["balance"] - row["deposited"])]
                for row in rows
            ],
        },
    }
    return result, None


def calculate_credit_card_payoff(form):
    balance = form.balance.data
    interest_rate = form.interest_rate.data
    if balance <= 0:
        return None, "Balance must be greater than zero"
    if interest_rate <= 0:
        return None, "Interest rate must be greater than zero"

    monthly_rate = interest_rate / 100 / 12
    try:
        if form.payoff_mode.data == "fixed":
            payment = form.monthly_payment.data
            if payment <= balance * monthly_rate:
                return None, "Monthly payment is too low to pay off the balance"
            months = formulas.card_payoff_months(balance, monthly_rate, payment)
        else:
            months = form.payoff_months.data
            if months <= 0:
                return None, "Months to pay off must be greater than zero"
            if months > MAX_PAYOFF_MONTHS:
                return None, f"Months to pay off must be {MAX_PAYOFF_MONTHS} or fewer"
            payment = formulas.card_payment_for_months(balance, monthly_rate, months)
    except OverflowError:
        return None, TOO_LARGE

    if months > MAX_PAYOFF_MONTHS:
        return None, (f"Payoff would take more than {MAX_PAYOFF_MONTHS // 12} years, "
                      "please increase the monthly payment")

    schedule = formulas.card_payoff_schedule(balance, monthly_rate, payment, months)
    total_interest = sum(row["interest"] for row in schedule)
    total_paid = sum(row["payment"] for row in schedule)
    if not _finite(payment, total_interest, total_paid):
        return None, TOO_LARGE

    result = {
        "monthly_payment": payment,
        "months": len(schedule),
        "total_interest": total_interest,
        "total_paid": total_paid,
        "summary": [
            ("Monthly Payment", format_money(payment)),
            ("Time to Pay Off", f"{len(schedule)} months ({_years_and_months(len(schedule))})"),
            ("Total Interest", format_money(total_interest)),
            ("Total Paid", format_money(total_paid)),
        ],
        "table": {
            "title": "Payoff Schedule",
            "columns": ["Month", "Payment", "Interest", "Principal", "Balance"],
            "rows": [
                [str(row["month"]), format_money(row["payment"]), format_money(row["interest"]),
                 format_money(row["principal"]), format_money(row["balance"])]
                for row in schedule
            ],
        },
    }
    return result, None


def calculate_retirement(form):
    current_age = form.current_age.data
    retirement_age = form.retirement_age.data
    years_in_retirement = form.years_in_retirement.data

    if current_age < 0 or retirement_age <= current_age:
        return None, "Retirement age must be greater than current age"
    if years_in_retirement <= 0:
        return None, "Years in retirement must be greater than zero"
    if retirement_age + years_in_retirement > MAX_PLANNING_AGE:
        return None, f"Retirement plans can run to age {MAX_PLANNING_AGE} at most"
    if form.current_savings.data < 0 or form.monthly_contribution.data < 0 or form.annual_expenses.data < 0:
        return None, "Savings and contributions cannot be negative"
    if form.inflation_rate.data < 0 or form.annual_return.data < 0 or form.retirement_return.data < 0:
        return None, "Rates cannot be negative"

    years_to_retirement = retirement_age - current_age
    try:
        expenses_at_retirement = formulas.inflate(form.annual_expenses.data, form.inflation_rate.data,
                                                  years_to_retirement)
        goal = formulas.retirement_goal(expenses_at_retirement, years_in_retirement, form.retirement_return.data)
        saving = formulas.retirement_savings(current_age, years_to_retirement, form.current_savings.data,
                                             form.monthly_contribution.data, form.annual_return.data)
        projected = saving[-1]["savings"]
        drawing = formulas.retirement_withdrawals(projected, retirement_age, years_in_retirement,
                                                  expenses_at_retirement, form.inflation_rate.data,
                                                  form.retirement_return.data)
        shortfall = max(0, goal - projected)
        extra_monthly = formulas.monthly_saving_for(shortfall, form.annual_return.data, years_to_retirement)
    except OverflowError:
        return None, TOO_LARGE
    if not _finite(goal, projected, shortfall, extra_monthly, drawing[-1]["savings"]):
        return None, TOO_LARGE

    if drawing[-1]["savings"] > 0:
        lasts_until = f"Beyond age {retirement_age + years_in_retirement}"
    else:
        lasts_until = f"Age {drawing[-1]['age']}"

    rows = [[str(row["age"]), format_currency(row["savings"]), "Saving"] for row in saving]
    rows += [[str(row["age"]), format_currency(row["savings"]), "Retired"] for row in drawing]

    result = {
        "goal": goal,
        "projected_savings": projected,
        "shortfall": shortfall,
        "summary": [
            ("Retirement Goal", format_currency(goal)),
            ("Projected Savings", format_currency(projected)),
            ("Additional Savings Needed", format_currency(shortfall)),
            ("Extra Monthly Saving Needed", format_money(extra_monthly)),
            ("Annual Expenses at Retirement", format_currency(expenses_at_retirement)),
            ("Money Lasts Until", lasts_until),
        ],
        "table": {
            "title": "Savings by Age",
            "columns": ["Age", "Balance", "Phase"],
            "rows": rows,
        },
    }
    return result, None


def calculate_investment(form):
    initial = form.initial_investment.data
    monthly = form.monthly_contribution.data
    annual_return = form.annual_return.data
    years = form.years.data

    if initial < 0 or monthly < 0:
        return None, "Investment amounts cannot be negative"
    if annual_return <= 0:
        return None, "Interest rate must be greater than zero"
    if years <= 0:
        return None, "Investment length must be greater than zero"
    if years > MAX_COMPOUND_YEARS:
        return None, f"Investment length must be {MAX_COMPOUND_YEARS} years or fewer"

    periods = formulas.COMPOUNDS_PER_YEAR[form.compound_frequency.data]
    rows = formulas.investment_growth(initial, monthly, annual_return, years, periods)
    final = rows[-1]
    if not _finite(final["value"], final["interest"]):
        return None, TOO_LARGE

    result = {
        "final_value": final["value"],
        "total_invested": final["invested"],
        "interest": final["interest"],
        "yearly": rows,
        "summary": [
            ("Final Value", format_currency(final["value"])),
            ("Total Invested", format_currency(final["invested"])),
            ("Investment Growth", format_currency(final["interest"])),
        ],
        "table": {
            "title": "Growth by Year",
            "columns": ["Year", "Value", "Invested", "Growth"],
            "rows": [
                [str(row["year"]), format_currency(row["value"]), format_currency(row["invested"]),
                 format_currency(row["interest"])]
                for row in rows
            ],
        },
    }
    return result, None


def calculate_compound_interest(form):
    principal = form.principal.data
    contribution = form.contribution.data
    interest_rate = form.interest_rate.data
    years = form.years.data

    if principal < 0 or contribution < 0 or interest_rate < 0 or years <= 0:
        return None, "Please enter valid positive values"
    if years > MAX_COMPOUND_YEARS:
        return None, f"Years must be {MAX_COMPOUND_YEARS} or fewer"

    try:
        growth = formulas.compound_interest(
            principal,
            interest_rate,
            years,
            compound_frequency=form.compound_frequency.data,
            contribution=contribution,
            contribution_frequency=form.contribution_frequency.data,
            inflation_rate=form.inflation_rate.data,
            include_inflation=form.include_inflation.data,
        )
    except (OverflowError, ValueError):
        # round() of an infinite or NaN balance
        return None, TOO_LARGE

    summary = [
        ("Future Value", format_currency(growth["future_value"])),
        ("Total Contributions", format_currency(growth["total_contributions"])),
        ("Interest Earned", format_currency(growth["interest_earned"])),
    ]
    columns = ["Year", "Balance", "Contributions", "Interest"]
    if form.include_inflation.data:
        summary.append(("Inflation-Adjusted Value", format_currency(growth["inflation_adjusted"])))
        columns.append("Inflation-Adjusted")

    rows = []
    for row in growth["yearly"]:
        cells = [
            str(row["year"]),
            format_currency(row["balance"]),
            format_currency(row["contributions"]),
            format_currency(row["interest"]),
        ]
        if form.include_inflation.data:
            cells.append(format_currency(row["inflation_adjusted"]))
        rows.append(cells)

    growth["summary"] = summary
    growth["table"] = {"title": "Growth by Year", "columns": columns, "rows": rows}
    return growth, None


# --- Health ---

def calculate_bmi(form):
    if form.units.data == "metric":
        height_cm = form.height_cm.data
        weight_kg = form.weight_kg.data
        if height_cm <= 0 or weight_kg <= 0:
            return None, "Height and weight must be greater than zero"
        value = formulas.bmi(weight_kg, height_cm / 100)
    else:
        total_inches = form.height_ft.data * 12 + form.height_in.data
        weight_lbs = form.weight_lbs.data
        if total_inches <= 0 or weight_lbs <= 0:
            return None, "Height and weight must be greater than zero"
        value = formulas.bmi_imperial(weight_lbs, total_inches)

    if not _finite(value):
        return None, TOO_LARGE
    value = round(value, 1)
    category = formulas.bmi_category(value)
    result = {
        "bmi": value,
        "category": category,
        "color": formulas.bmi_color(value),
        "summary": [
            ("BMI", format_number(value, 1)),
            ("Category", category),
        ],
        "table": {
            "title": "BMI Categories",
            "columns": ["Category", "BMI Range"],
            "rows": [
                ["Severely Underweight", "below 16.5"],
                ["Underweight", "16.5 - 18.4"],
                ["Normal", "18.5 - 24.9"],
                ["Overweight", "25 - 29.9"],
                ["Obese (Class I)", "30 - 34.9"],
                ["Obese (Class II)", "35 - 39.9"],
                ["Obese (Class III)", "40 and above"],
            ],
        },
    }
    return result, None


def calculate_calories(form):
    age = form.age.data
    weight = form.weight.data
    height = form.height.data
    if age <= 0 or age > MAX_PLANNING_AGE or weight <= 0 or height <= 0:
        return None, "Please enter valid values for all fields"

    imperial = form.units.data == "imperial"
    weight_kg = weight * formulas.LBS_TO_KG if imperial else weight
    height_cm = height * formulas.INCHES_TO_CM if imperial else height
    goal = form.goal.data

    try:
        energy = formulas.daily_calories(form.gender.data, weight_kg, height_cm, age, form.activity.data, goal)
        macros = formulas.macro_grams(energy["calories"], goal)
    except OverflowError:
        return None, TOO_LARGE

    unit = "lbs" if imperial else "kg"
    difference = energy["calories"] - energy["tdee"]
    rows = []
    for days in (30, 90, 180):
        change = formulas.weight_change_kg(difference, days)
        if imperial:
            change /= formulas.LBS_TO_KG
        if difference < 0:
            label = f"-{format_number(change, 1)} {unit}"
        elif difference > 0:
            label = f"+{format_number(change, 1)} {unit}"
        else:
            label = "No change"
        rows.append([f"{days} days", label])

    energy["macros"] = macros
    energy["summary"] = [
        ("Basal Metabolic Rate", f"{energy['bmr']:,} calories/day"),
        ("Maintenance Calories", f"{energy['tdee']:,} calories/day"),
        ("Daily Calorie Target", f"{energy['calories']:,} calories/day"),
        ("Protein", f"{macros['protein']:,} g"),
        ("Carbohydrates", f"{macros['carbs']:,} g"),
        ("Fat", f"{macros['fat']:,} g"),
    ]
    energy["table"] = {
        "title": "Projected Weight Change",
        "columns": ["Period", "Change"],
        "rows": rows,
    }
    return energy, None


def calculate_body_fat(form):
    gender = form.gender.data
    age = form.age.data
    height = form.height.data
    weight = form.weight.data
    method = form.method.data

    if age <= 0 or height <= 0 or weight <= 0:
        return None, "Please enter valid values for height, weight and age"

    try:
        if method == "navy":
            if gender == "male" and form.waist.data <= form.neck.data:
                return None, "Waist must be larger than neck"
            if gender == "female" and form.waist.data + form.hip.data <= form.neck.data:
                return None, "Waist and hip must be larger than neck"
            percent = formulas.body_fat_navy(gender, height, form.waist.data, form.neck.data, form.hip.data)
            method_name = "U.S. Navy"
        elif method == "skinfold":
            if gender == "male":
                sites = (form.chest.data, form.abdomen.data, form.thigh.data)
            else:
                sites = (form.tricep.data, form.suprailiac.data, form.thigh.data)
            if any(site <= 0 for site in sites):
                return None, "Skinfold measurements must be greater than zero"
            percent = formulas.body_fat_skinfold(gender, age, sum(sites))
            method_name = "Skinfold (3-site)"
        else:
            bmi_value = formulas.bmi(weight, height / 100)
            percent = formulas.body_fat_from_bmi(gender, bmi_value, age)
            method_name = "BMI estimate"
    except (ValueError, ZeroDivisionError, OverflowError):
        return None, "Could not calculate body fat. Please check your measurements."
    if not _finite(percent):
        return None, "Could not calculate body fat. Please check your measurements."

    low, high = formulas.BODY_FAT_LIMITS
    percent = round(min(max(percent, low), high), 1)
    fat_mass = weight * (percent / 100)
    lean_mass = weight - fat_mass
    category = formulas.body_fat_category(gender, percent)

    ranges = []
    lower = 0
    for threshold, name in formulas.BODY_FAT_CATEGORIES[gender]:
        ranges.append([name, f"{lower}% - {threshold}%"])
        lower = threshold
    ranges.append(["Obese", f"{lower}% and above"])

    result = {
        "body_fat": percent,
        "category": category,
        "fat_mass": fat_mass,
        "lean_mass": lean_mass,
        "summary": [
            ("Body Fat", f"{format_number(percent, 1)}%"),
            ("Category", category),
            ("Fat Mass", f"{format_number(fat_mass, 1)} kg"),
            ("Lean Mass", f"{format_number(lean_mass, 1)} kg"),
            ("Method", method_name),
        ],
        "table": {
            "title": f"Body Fat Categories ({gender.capitalize()})",
            "columns": ["Category", "Range"],
            "rows": ranges,
        },
    }
    return result, None


def calculate_pregnancy(form):
    known_date = form.known_date.data
    method = form.method.data
    cycle_length = form.cycle_length.data
    today = date.today()

    if not known_date:
        return None, "Please select a date"
    if known_date > today:
        return None, "Date cannot be in the future"
    if method == "lmp" and not 20 <= cycle_length <= 45:
        return None, "Cycle length must be between 20 and 45 days"

    try:
        dates = formulas.pregnancy_dates(known_date, method, cycle_length, today)
    except OverflowError:
        return None, "Date is out of range"

    if dates["trimester"] is None:
        progress = "Past due date"
        trimester = "Past due date"
    else:
        progress = f"{dates['weeks']} weeks, {dates['days']} days"
        trimester = {1: "First", 2: "Second", 3: "Third"}[dates["trimester"]]

    dates["summary"] = [
        ("Due Date", format_date_with_weekday(dates["due_date"])),
        ("Estimated Conception", format_date_with_weekday(dates["conception"])),
        ("Current Progress", progress),
        ("Trimester", trimester),
        ("Days Until Due Date", str(max(0, (dates["due_date"] - today).days))),
    ]
    dates["table"] = {
        "title": "Milestones",
        "columns": ["Milestone", "Date"],
        "rows": [
            ["End of first trimester", format_date(dates["first_trimester_end"])],
            ["End of second trimester", format_date(dates["second_trimester_end"])],
            ["Due date", format_date(dates["due_date"])],
        ],
    }
    return dates, None


# --- Math ---

def calculate_scientific(form):
    expression = (form.expression.data or "").strip()
    try:
        value = expressions.evaluate(expression, form.angle_mode.data)
    except expressions.ExpressionError as e:
        return None, str(e)
    except ZeroDivisionError:
        return None, "Cannot divide by zero"
    except OverflowError:
        return None, TOO_LARGE
    except ValueError:
        return None, "Math error: check the function arguments"

    # "or 0.0" folds -0.0
    value = value or 0.0
    result = {
        "value": value,
        "summary": [
            ("Expression", expression),
            ("Result", f"{value:.12g}"),
            ("Angle Mode", "Degrees" if form.angle_mode.data == "deg" else "Radians"),
        ],
        "table": None,
    }
    return result, None


def calculate_fraction(form):
    operands = (form.numerator1.data, form.denominator1.data, form.numerator2.data, form.denominator2.data)
    if any(abs(value) > MAX_FRACTION_OPERAND for value in operands):
        return None, f"Numbers must be between -{MAX_FRACTION_OPERAND:,} and {MAX_FRACTION_OPERAND:,}"
    if form.denominator1.data == 0 or form.denominator2.data == 0:
        return None, "Denominator cannot be zero"

    operation = form.operation.data
    first = formulas.make_fraction(form.numerator1.data, form.denominator1.data)
    second = formulas.make_fraction(form.numerator2.data, form.denominator2.data)
    if operation == "divide" and second["numerator"] == 0:
        return None, "Cannot divide by zero"

    fraction = formulas.FRACTION_OPERATIONS[operation](first, second)
    symbol = dict(form.operation.choices)[operation]

    if fraction["denominator"] == 1:
        simplified = f"{fraction['numerator']}"
    else:
        simplified = f"{fraction['numerator']}/{fraction['denominator']}"
    decimal = fraction["numerator"] / fraction["denominator"]

    result = {
        "fraction": fraction,
        "decimal": decimal,
        "summary": [
            ("Expression", f"{first['numerator']}/{first['denominator']} {symbol} "
                           f"{second['numerator']}/{second['denominator']}"),
            ("Result", simplified),
            ("Mixed Number", formulas.format_fraction(fraction)),
            ("Decimal", format_number(decimal, 4)),
        ],
        "table": None,
    }
    return result, None


def calculate_percentage(form):
    mode = form.mode.data
    if mode == "find_percentage":
        value = formulas.percent_of(form.percentage_value.data, form.base_value.data)
        summary = [
            ("Question", f"What is {format_compact(form.percentage_value.data)}% of "
                         f"{format_compact(form.base_value.data)}?"),
            ("Answer", format_compact(value)),
        ]
    elif mode == "find_change":
        if form.original_value.data == 0:
            return None, "Original value cannot be zero"
        change = formulas.percent_change(form.original_value.data, form.new_value.data)
        value = change["percent_change"]
        direction = "Increase" if change["is_increase"] else "Decrease"
        summary = [
            ("Change", f"{format_compact(form.original_value.data)} to "
                       f"{format_compact(form.new_value.data)}"),
            (f"Percentage {direction}", f"{format_compact(value)}%"),
        ]
    elif mode == "find_value":
        if form.target_percentage.data == 0:
            return None, "Percentage cannot be zero"
        value = formulas.value_from_percentage(form.known_value.data, form.target_percentage.data)
        summary = [
            ("Question", f"{format_compact(form.known_value.data)} is "
                         f"{format_compact(form.target_percentage.data)}% of what?"),
            ("Answer", format_compact(value)),
        ]
    else:
        if form.applied_percentage.data == -100:
            return None, "Applied percentage cannot be -100%"
        value = formulas.reverse_percentage(form.final_value.data, form.applied_percentage.data)
        summary = [
            ("Final Value", format_compact(form.final_value.data)),
            ("Original Value", format_compact(value)),
        ]

    if not _finite(value):
        return None, TOO_LARGE
    return {"mode": mode, "value": value, "summary": summary, "table": None}, None


def calculate_triangle(form):
    if form.mode.data == "base-height":
        base = form.base.data
        height = form.height.data
        if base <= 0 or height <= 0:
            return None, "Base and height must be positive values"
        area = formulas.triangle_area(base, height)
        perimeter = None
        summary = [
            ("Area", format_compact(area)),
            ("Perimeter", "Needs all three sides"),
        ]
    else:
        a, b, c = form.side_a.data, form.side_b.data, form.side_c.data
        if a <= 0 or b <= 0 or c <= 0:
            return None, "All sides must be positive values"
        if not formulas.is_valid_triangle(a, b, c):
            return None, "Invalid triangle: The sum of any two sides must be greater than the third side"
        area = formulas.triangle_area_from_sides(a, b, c)
        perimeter = formulas.triangle_perimeter(a, b, c)
        summary = [
            ("Area", format_compact(area)),
            ("Perimeter", format_compact(perimeter)),
            ("Semi-perimeter", format_compact(perimeter / 2)),
        ]

    if not _finite(area, perimeter or 0):
        return None, TOO_LARGE
    return {"area": area, "perimeter": perimeter, "summary": summary, "table": None}, None


def calculate_statistics(form):
    values = formulas.parse_numbers(form.data_set.data)
    if len(values) < 2:
        return None, "Please enter at least two valid numbers"

    population = form.mode.data == "population"
    try:
        variance = formulas.variance(values, population=population)
        std_dev = formulas.standard_deviation(values, population=population)
    except OverflowError:
        return None, TOO_LARGE
    average = formulas.mean(values)
    middle = formulas.median(values)
    if not _finite(sum(values), average, middle, variance, std_dev):
        return None, TOO_LARGE

    result = {
        "values": values,
        "mean": average,
        "median": middle,
        "variance": variance,
        "standard_deviation": std_dev,
        "summary": [
            ("Count", str(len(values))),
            ("Sum", format_compact(sum(values))),
            ("Mean", format_number(average, 4)),
            ("Median", format_number(middle, 4)),
            ("Minimum", format_compact(min(values))),
            ("Maximum", format_compact(max(values))),
            (f"{'Population' if population else 'Sample'} Variance", format_number(variance, 4)),
            ("Standard Deviation", format_number(std_dev, 4)),
        ],
        "table": None,
    }
    return result, None


def calculate_quadratic(form):
    a, b, c = form.a.data, form.b.data, form.c.data
    if a == 0:
        return None, "Coefficient 'a' cannot be zero (not a quadratic equation)"

    solution = formulas.solve_quadratic(a, b, c)
    numbers = [solution[key] for key in ("discriminant", "root1", "root2", "real_part", "imaginary_part")
               if solution[key] is not None]
    if not _finite(*numbers):
        return None, TOO_LARGE

    summary = [
        ("Equation", format_equation(a, b, c)),
        ("Discriminant", format_compact(solution["discriminant"])),
    ]
    if solution["has_real_roots"]:
        if solution["discriminant"] == 0:
            summary.append(("Root Type", "One repeated real root"))
        else:
            summary.append(("Root Type", "Two distinct real roots"))
        summary.append(("Root 1", format_number(solution["root1"], 4)))
        summary.append(("Root 2", format_number(solution["root2"], 4)))
    else:
        real = format_number(solution["real_part"], 4)
        imaginary = format_number(solution["imaginary_part"], 4)
        summary.append(("Root Type", "Two complex conjugate roots"))
        summary.append(("Root 1", f"{real} + {imaginary}i"))
        summary.append(("Root 2", f"{real} - {imaginary}i"))

    solution["summary"] = summary
    solution["table"] = None
    return solution, None


def calculate_permutation_combination(form):
    n, r = form.n.data, form.r.data
    if n < 0 or r < 0:
        return None, "Values must be non-negative"
    if n < r:
        return None, "n must be greater than or equal to r"
    if n > formulas.MAX_FACTORIAL_N:
        return None, "n is too large, please use a smaller value"

    if form.mode.data == "permutation":
        value = formulas.permutation(n, r)
        summary = [
            ("Formula", "P(n, r) = n! / (n - r)!"),
            (f"P({n}, {r})", _count(value)),
        ]
    else:
        value = formulas.combination(n, r)
        summary = [
            ("Formula", "C(n, r) = n! / (r! × (n - r)!)"),
            (f"C({n}, {r})", _count(value)),
        ]

    return {"mode": form.mode.data, "value": value, "summary": summary, "table": None}, None


# --- General ---

def calculate_age(form):
    birth_date = form.birth_date.data
    as_of = form.as_of.data or date.today()
    if not birth_date:
        return None, "Please select a birth date"
    if birth_date > as_of:
        return None, "Birth date cannot be in the future"

    age = formulas.age_breakdown(birth_date, as_of)
    if age["next_birthday"]:
        next_birthday = format_date(age["next_birthday"])
        days_until = str(age["days_until_birthday"])
    else:
        next_birthday = days_until = "Beyond the calendar"
    age["summary"] = [
        ("Age", f"{age['years']} years, {age['months']} months, {age['days']} days"),
        ("Total Months", f"{age['total_months']:,}"),
        ("Total Weeks", f"{age['total_weeks']:,}"),
        ("Total Days", f"{age['total_days']:,}"),
        ("Next Birthday", next_birthday),
        ("Days Until Next Birthday", days_until),
    ]
    age["table"] = None
    return age, None


def calculate_date(form):
    mode = form.mode.data
    if mode == "difference":
        start, end = form.start_date.data, form.end_date.data
        if not start or not end:
            return None, "Please select both dates"
        difference = formulas.date_difference(start, end)
        summary = [
            ("From", format_date_with_weekday(start)),
            ("To", format_date_with_weekday(end)),
            ("Difference", f"{difference['years']} years, {difference['months']} months, "
                           f"{difference['days']} days"),
            ("Total Days", f"{difference['total_days']:,}"),
            ("Total Weeks", f"{difference['total_weeks']:,} weeks, {difference['total_days'] % 7} days"),
            ("Total Months", f"{difference['total_months']:,}"),
        ]
        if difference["end_before_start"]:
            summary.append(("Note", "The end date is before the start date"))
        difference["summary"] = summary
        difference["table"] = None
        return difference, None

    base_date = form.base_date.data
    amount = form.amount.data
    unit = form.unit.data
    if not base_date:
        return None, "Please select a date"
    if amount < 0:
        return None, "Amount cannot be negative"
    signed = amount if mode == "add" else -amount
    try:
        result_date = formulas.shift_date(base_date, signed, unit)
    except (ValueError, OverflowError):
        return None, "Resulting date is out of range"

    verb = "plus" if mode == "add" else "minus"
    result = {
        "date": result_date,
        "summary": [
            ("Calculation", f"{format_date(base_date)} {verb} {amount:,} {unit}"),
            ("Result", format_date_with_weekday(result_date)),
            ("Days From Start", f"{(result_date - base_date).days:,}"),
        ],
        "table": None,
    }
    return result, None


def calculate_time(form):
    first_parts = (form.hours1.data, form.minutes1.data, form.seconds1.data)
    second_parts = (form.hours2.data, form.minutes2.data, form.seconds2.data)
    if any(value < 0 for value in first_parts + second_parts):
        return None, "Time values cannot be negative"
    if any(value > MAX_TIME_VALUE for value in first_parts + second_parts):
        return None, f"Time values must be {MAX_TIME_VALUE:,} or less"

    first = formulas.to_seconds(*first_parts)
    second = formulas.to_seconds(*second_parts)
    adding = form.operation.data == "add"
    total = first + second if adding else first - second

    words = formulas.describe_duration(total)
    if total < 0:
        words = f"minus {words}"
    result = {
        "total_seconds": total,
        "summary": [
            ("Calculation", f"{formulas.format_clock(first)} {'+' if adding else '-'} "
                            f"{formulas.format_clock(second)}"),
            ("Result", formulas.format_clock(total)),
            ("In Words", words),
            ("Total Seconds", f"{total:,}"),
            ("Total Minutes", format_number(total / 60)),
            ("Total Hours", format_number(total / 3600, 4)),
        ],
        "table": None,
    }
    return result, None


def calculate_hours(form):
    rows = []
    total_hours = 0
    for entry in form.entries:
        start = (entry.start_time.data or "").strip()
        end = (entry.end_time.data or "").strip()
        if not TIME_PATTERN.match(start) or not TIME_PATTERN.match(end):
            return None, "Please enter times as HH:MM"
        break_minutes = entry.break_minutes.data or 0
        if break_minutes < 0:
            return None, "Break duration cannot be negative"
        if break_minutes > MAX_BREAK_MINUTES:
            return None, f"Break duration must be {MAX_BREAK_MINUTES:,} minutes or less"
        hours = formulas.timesheet_hours(start, end, break_minutes)
        total_hours += hours
        rows.append([entry.day.data, start, end, str(break_minutes), format_number(hours)])

    if not rows:
        return None, "Add at least one time entry"

    total_hours = round(total_hours, 2)
    total_pay = total_hours * form.hourly_rate.data
    if not _finite(total_pay):
        return None, TOO_LARGE
    result = {
        "total_hours": total_hours,
        "total_pay": total_pay,
        "summary": [
            ("Total Hours", format_number(total_hours)),
            ("Hourly Rate", f"${format_number(form.hourly_rate.data)}"),
            ("Total Pay", f"${total_pay:,.2f}"),
        ],
        "table": {
            "title": "Time Sheet",
            "columns": ["Day", "Start", "End", "Break (min)", "Hours"],
            "rows": rows,
        },
    }
    return result, None


def add_time_entry(form):
    """Append a row for the day after the last one."""
    next_day = "Monday"
    if form.entries.entries:
        last_day = form.entries[-1].day.data
        if last_day in DAYS_OF_WEEK:
            next_day = DAYS_OF_WEEK[(DAYS_OF_WEEK.index(last_day) + 1) % 7]
    form.entries.append_entry({
        "day": next_day,
        "start_time": "09:00",
        "end_time": "17:00",
        "break_minutes": 60,
    })
    return None


def remove_time_entry(form, index=None):
    return _remove_row(form.entries, "time entry", index)


def calculate_gpa(form):
    grade_labels = {value: label for value, label, _ in formulas.GRADES}
    courses = []
    rows = []
    for entry in form.courses:
        course = (entry.course.data or "").strip()
        if not course:
            return None, "Please enter names for all courses"
        grade = entry.grade.data
        credits = entry.credits.data or 0
        courses.append((grade, credits))
        points = formulas.GRADE_POINTS.get(grade, 0) * credits
        rows.append([course, grade_labels.get(grade, grade), str(credits), format_number(points)])

    totals = formulas.grade_point_average(courses)
    if totals["total_credits"] == 0:
        return None, "Please add at least one course with credits"

    gpa = totals["gpa"]
    totals["summary"] = [
        ("GPA", format_number(gpa)),
        ("Letter Grade", formulas.gpa_letter(gpa)),
        ("Total Credits", str(totals["total_credits"])),
        ("Total Grade Points", format_number(totals["total_points"])),
        ("Assessment", formulas.gpa_message(gpa)),
    ]
    totals["table"] = {
        "title": "Courses",
        "columns": ["Course", "Grade", "Credits", "Points"],
        "rows": rows,
    }
    return totals, None


def add_course(form):
    form.courses.append_entry({"course": f"Course {len(form.courses) + 1}", "grade": "a", "credits": 3})
    return None


def remove_course(form, index=None):
    return _remove_row(form.courses, "course", index)


def _password_character_sets(form):
    return [chars for key, chars in formulas.PASSWORD_CHARACTER_SETS.items() if form[key].data]


def _password_length_error(length):
    low, high = formulas.PASSWORD_LENGTH_RANGE
    if not low <= length <= high:
        return f"Password length must be between {low} and {high}"
    return None


def new_password(form):
    """Draw a fresh password when Generate is pressed; returns the inputs to remember."""
    character_sets = _password_character_sets(form)
    if not character_sets or _password_length_error(form.length.data):
        return {}
    form.password.data = formulas.generate_password(form.length.data, character_sets)
    return {"password": form.password.data}


def calculate_password(form):
    length = form.length.data
    err = _password_length_error(length)
    if err:
        return None, err
    character_sets = _password_character_sets(form)
    if not character_sets:
        return None, "Please select at least one character type"

    pool = "".join(character_sets)
    password = form.password.data or ""
    if len(password) != length or any(char not in pool for char in password):
        password = formulas.generate_password(length, character_sets)
        form.password.data = password

    score = formulas.password_strength(length, len(character_sets))
    included = [key for key in formulas.PASSWORD_CHARACTER_SETS if form[key].data]
    result = {
        "password": password,
        "strength": score,
        "summary": [
            ("Password", password),
            ("Length", f"{length} characters"),
            ("Strength", f"{formulas.password_strength_label(score)} ({score}/100)"),
            ("Includes", ", ".join(included)),
        ],
        "table": None,
    }
    return result, None


def calculate_unit_conversion(form):
    raw_value = (form.value.data or "").strip()
    if not raw_value:
        return None, "Please enter a value to convert"
    try:
        value = float(raw_value)
    except ValueError:
        return None, "Please enter a valid number"
    if not _finite(value):
        return None, "Please enter a valid number"

    from_type, _, from_unit = form.from_unit.data.partition(":")
    to_type, _, to_unit = form.to_unit.data.partition(":")
    if from_type != to_type:
        return None, "Both units must be of the same type"

    converted, err = conversions.convert(value, from_type, from_unit, to_unit)
    if err:
        return None, err
    if not _finite(converted):
        return None, TOO_LARGE

    from_name = conversions.get_unit(from_type, from_unit)[1]
    to_name = conversions.get_unit(to_type, to_unit)[1]
    result = {
        "value": value,
        "converted": converted,
        "summary": [
            ("Result", f"{format_compact(value)} {from_name} = {format_number(converted, 6)} {to_name}"),
        ],
        "table": None,
    }
    if from_type != "temperature":
        factor = conversions.get_unit(from_type, from_unit)[2] / conversions.get_unit(to_type, to_unit)[2]
        result["summary"].append(("Multiply By", format_number(factor, 6)))
    return result, None


# --- Fun ---

def calculate_love(form):
    name1 = (form.name1.data or "").strip()
    name2 = (form.name2.data or "").strip()
    if not name1 or not name2:
        return None, "Please enter both names"

    score = formulas.love_score(name1, name2)
    result = {
        "score": score,
        "summary": [
            ("Couple", f"{name1} & {name2}"),
            ("Love Score", f"{score}%"),
            ("Verdict", formulas.love_message(score)),
        ],
        "table": None,
    }
    return result, None


def calculate_lucky_number(form):
    name = (form.name.data or "").strip()
    birth_date = form.birth_date.data
    if not name:
        return None, "Please enter your name"
    if not birth_date:
        return None, "Please select your birth date"
    if birth_date > date.today():
        return None, "Birth date cannot be in the future"

    number = formulas.lucky_number(name, birth_date)
    colour, day, gemstone, meaning = formulas.LUCKY_TRAITS[number]
    result = {
        "number": number,
        "summary": [
            ("Lucky Number", str(number)),
            ("Lucky Colour", colour),
            ("Lucky Day", day),
            ("Gemstone", gemstone),
            ("Meaning", meaning),
        ],
        "table": None,
    }
    return result, None


def calculate_pet_age(form):
    pet_age = form.pet_age.data
    if pet_age <= 0:
        return None, "Pet age must be greater than 0"
    human_age = formulas.pet_human_age(form.pet_type.data, pet_age, form.pet_weight.data)
    if not _finite(human_age):
        return None, TOO_LARGE
    result = {
        "human_age": human_age,
        "summary": [
            ("Pet", to_title_case(form.pet_type.data)),
            ("Age in Human Years", f"{round(human_age)} human years"),
        ],
        "table": None,
    }
    return result, None


def _body_measurements(form):
    weight_kg = form.weight.data * formulas.LBS_TO_KG if form.weight_unit.data == "lbs" else form.weight.data
    height_cm = form.height.data * formulas.INCHES_TO_CM if form.height_unit.data == "in" else form.height.data
    return weight_kg, height_cm


def calculate_calorie_burn(form):
    if form.weight.data <= 0 or form.height.data <= 0 or form.age.data <= 0:
        return None, "Please enter valid values for weight, height and age"
    weight_kg, height_cm = _body_measurements(form)

    rows = []
    total = 0
    total_minutes = 0
    for entry in form.activities:
        activity = entry.activity.data
        minutes = entry.duration.data
        if activity not in formulas.ACTIVITY_METS:
            return None, "Please choose an activity from the list"
        if minutes <= 0:
            return None, "Activity duration must be greater than zero"
        if minutes > 24 * 60:
            return None, "Activity duration must be 1,440 minutes or less"
        met = formulas.ACTIVITY_METS[activity]
        calories = formulas.activity_calories(met, weight_kg, minutes)
        if not _finite(calories):
            return None, TOO_LARGE
        total += calories
        total_minutes += minutes
        rows.append([activity, str(minutes), format_number(met, 1), f"{round(calories):,}"])

    bmr = formulas.bmr_mifflin_st_jeor(form.gender.data, weight_kg, height_cm, form.age.data)
    if not _finite(total, bmr, total + bmr):
        return None, TOO_LARGE

    result = {
        "activity_calories": total,
        "bmr": bmr,
        "summary": [
            ("Calories From Activities", f"{round(total):,}"),
            ("Activity Time", f"{total_minutes:,} minutes"),
            ("Resting Calories (BMR)", f"{round(bmr):,}"),
            ("Estimated Total for the Day", f"{round(total + bmr):,}"),
        ],
        "table": {
            "title": "Activities",
            "columns": ["Activity", "Minutes", "MET", "Calories"],
            "rows": rows,
        },
    }
    return result, None


def add_activity(form):
    form.activities.append_entry()
    return None


def remove_activity(form, index=None):
    return _remove_row(form.activities, "activity", index)


def calculate_alcohol(form):
    if form.weight.data <= 0:
        return None, "Weight must be greater than zero"
    weight_kg = form.weight.data * formulas.LBS_TO_KG if form.weight_unit.data == "lbs" else form.weight.data

    drinks = []
    rows = []
    for entry in form.drinks:
        drink_type = entry.drink_type.data
        name, abv, serving = formulas.DRINK_TYPES.get(drink_type, formulas.DRINK_TYPES["custom"])
        if drink_type not in formulas.DRINK_TYPES or drink_type == "custom":
            abv, serving = entry.alcohol_percent.data, entry.serving_ml.data
        quantity = entry.quantity.data
        hours_ago = entry.hours_ago.data
        if not 0 <= abv <= 100:
            return None, "Alcohol percentage must be between 0 and 100"
        if serving < 0 or quantity < 0 or hours_ago < 0:
            return None, "Drink values cannot be negative"
        if quantity > MAX_DRINK_QUANTITY:
            return None, f"Quantity must be {MAX_DRINK_QUANTITY} or fewer per drink"
        drinks.append((abv, serving, quantity, hours_ago))
        rows.append([name, f"{format_compact(abv)}%", format_compact(serving), str(quantity), format_compact(hours_ago)])

    try:
        estimate = formulas.blood_alcohol(form.gender.data, weight_kg, drinks, form.food_intake.data)
    except (OverflowError, ValueError):
        return None, TOO_LARGE

    bac = estimate["bac"]
    estimate["summary"] = [
        ("Estimated BAC", f"{bac:.3f}%"),
        ("Impairment", formulas.impairment_level(bac)),
        ("Time Until Sober", formulas.format_hours_minutes(estimate["hours_to_sober"])),
        ("Total Drinks", str(sum(quantity for _, _, quantity, _ in drinks))),
        ("Legal Driving Limit", "0.08% in most US states"),
        ("Note", "This is an estimate only. Never drink and drive."),
    ]
    estimate["table"] = {
        "title": "Drinks",
        "columns": ["Drink", "ABV", "Serving (ml)", "Qty", "Hours Ago"],
        "rows": rows,
    }
    return estimate, None


def add_drink(form):
    form.drinks.append_entry()
    return None


def remove_drink(form, index=None):
    return _remove_row(form.drinks, "drink entry", index)


def calculate_binge_watch(form):
    show_name = (form.show_name.data or "").strip()
    seasons = form.seasons.data
    episodes_per_season = form.episodes_per_season.data
    episode_length = form.episode_length.data
    hours_per_day = form.hours_per_day.data

    if not show_name:
        return None, "Please enter a show name"
    if seasons <= 0 or episodes_per_season <= 0 or episode_length <= 0 or hours_per_day <= 0:
        return None, "All values must be greater than zero"
    if hours_per_day > 24:
        return None, "Viewing hours per day cannot exceed 24"
    if seasons * episodes_per_season > MAX_EPISODES or episode_length > MAX_EPISODE_MINUTES:
        return None, TOO_LARGE

    intro_seconds = form.intro_length.data if form.skip_intro.data else 0
    if intro_seconds < 0:
        return None, "Intro length cannot be negative"
    if intro_seconds >= episode_length * 60:
        return None, "Intro must be shorter than the episode"

    times = formulas.binge_watch_time(seasons, episodes_per_season, episode_length, hours_per_day, intro_seconds)
    if not _finite(times["days"]):
        return None, TOO_LARGE
    try:
        finish = format_date(date.today() + timedelta(days=math.ceil(times["days"])))
    except OverflowError:
        finish = "Beyond the calendar"

    summary = [
        ("Show", show_name),
        ("Total Episodes", f"{times['episodes']:,}"),
        ("Total Watch Time", formulas.format_hours_minutes(times["hours"])),
        ("Days to Finish", f"{format_number(times['days'], 1)} days"),
        ("Weeks to Finish", f"{format_number(times['weeks'], 1)} weeks"),
        ("Episodes per Day", format_number(times["episodes_per_day"], 1)),
        ("Finish Date", finish),
    ]
    if intro_seconds:
        summary.append(("Time Saved Skipping Intros", formulas.format_hours_minutes(times["intro_hours_saved"])))

    times["summary"] = summary
    times["table"] = None
    return times, None


CALCULATOR_HANDLERS = {
    "mortgage": {
        "form": MortgageForm,
        "handler": calculate_mortgage,
        "success": "Mortgage calculated successfully",
    },
    "loan": {
        "form": LoanForm,
        "handler": calculate_loan,
        "success": "Loan calculated successfully",
    },
    "interest": {
        "form": InterestForm,
        "handler": calculate_interest,
        "success": "Interest calculated successfully",
    },
    "credit-card-payoff": {
        "form": CreditCardPayoffForm,
        "handler": calculate_credit_card_payoff,
        "success": "Payoff plan calculated successfully",
    },
    "retirement": {
        "form": RetirementForm,
        "handler": calculate_retirement,
        "success": "Retirement plan calculated successfully",
    },
    "investment": {
        "form": InvestmentForm,
        "handler": calculate_investment,
        "success": "Investment growth calculated successfully",
    },
    "compound-interest": {
        "form": CompoundInterestForm,
        "handler": calculate_compound_interest,
        "success": "Compound interest calculated successfully",
    },
    "bmi": {
        "form": BMIForm,
        "handler": calculate_bmi,
        "success": "BMI calculated successfully",
    },
    "calorie": {
        "form": CalorieForm,
        "handler": calculate_calories,
        "success": "Calorie needs calculated successfully",
    },
    "body-fat": {
        "form": BodyFatForm,
        "handler": calculate_body_fat,
        "success": "Body fat calculated successfully",
    },
    "pregnancy": {
        "form": PregnancyForm,
        "handler": calculate_pregnancy,
        "success": "Due date calculated successfully",
    },
    "scientific": {
        "form": ScientificForm,
        "handler": calculate_scientific,
        "success": "Calculation completed",
    },
    "fraction": {
        "form": FractionForm,
        "handler": calculate_fraction,
        "success": "Calculation completed",
    },
    "percentage": {
        "form": PercentageForm,
        "handler": calculate_percentage,
        "success": "Percentage calculated!",
    },
    "triangle": {
        "form": TriangleForm,
        "handler": calculate_triangle,
        "success": "Triangle properties calculated successfully",
    },
    "standard-deviation": {
        "form": StatisticsForm,
        "handler": calculate_statistics,
        "success": "Statistics calculated successfully",
    },
    "quadratic-equation": {
        "form": QuadraticForm,
        "handler": calculate_quadratic,
        "success": "Equation solved successfully",
    },
    "permutation-combination": {
        "form": PermutationCombinationForm,
        "handler": calculate_permutation_combination,
        "success": "Calculated successfully",
    },
    "age": {
        "form": AgeForm,
        "handler": calculate_age,
        "success": "Age calculated successfully",
    },
    "date": {
        "form": DateCalculatorForm,
        "handler": calculate_date,
        "success": "Date calculated successfully",
    },
    "time": {
        "form": TimeCalculatorForm,
        "handler": calculate_time,
        "success": "Time calculated successfully",
    },
    "hours": {
        "form": HoursForm,
        "handler": calculate_hours,
        "success": "Hours and pay calculated successfully",
        "actions": {
            "add_entry": add_time_entry,
            "remove_entry": remove_time_entry,
        },
        "row_label": "Entry",
    },
    "gpa": {
        "form": GPAForm,
        "handler": calculate_gpa,
        "success": "GPA calculated successfully",
        "actions": {
            "add_entry": add_course,
            "remove_entry": remove_course,
        },
        "row_label": "Course",
    },
    "password-generator": {
        "form": PasswordForm,
        "handler": calculate_password,
        "prepare": new_password,
        "success": "Password generated successfully",
    },
    "unit-converter": {
        "form": UnitConverterForm,
        "handler": calculate_unit_conversion,
        "success": "Conversion calculated successfully",
    },
    "love": {
        "form": LoveForm,
        "handler": calculate_love,
        "success": "Love score calculated!",
    },
    "lucky-number": {
        "form": LuckyNumberForm,
        "handler": calculate_lucky_number,
        "success": "Your lucky number has been revealed!",
    },
    "pet-age": {
        "form": PetAgeForm,
        "handler": calculate_pet_age,
        "success": "Your pet's age has been calculated!",
    },
    "calorie-burn": {
        "form": CalorieBurnForm,
        "handler": calculate_calorie_burn,
        "success": "Calories burned calculated successfully",
        "actions": {
            "add_entry": add_activity,
            "remove_entry": remove_activity,
        },
        "row_label": "Activity",
    },
    "alcohol-consumption": {
        "form": AlcoholForm,
        "handler": calculate_alcohol,
        "success": "Blood alcohol content estimated",
        "actions": {
            "add_entry": add_drink,
            "remove_entry": remove_drink,
        },
        "row_label": "Drink",
    },
    "binge-watch": {
        "form": BingeWatchForm,
        "handler": calculate_binge_watch,
        "success": "Binge-watch time calculated!",
    },
}
