import math
from datetime import date

from flask_wtf import FlaskForm
from wtforms import (
    BooleanField,
    DateField,
    FieldList,
    FloatField,
    Form,
    FormField,
    HiddenField,
    IntegerField,
    SelectField,
    StringField,
    TextAreaField,
)
from wtforms.validators import Length, Optional

from app.projects.calculators.core.conversions import unit_choices
from app.projects.calculators.core.expressions import MAX_EXPRESSION_LENGTH
from app.projects.calculators.core.formulas import (
    ACTIVITY_METS,
    COMPOUNDS_PER_YEAR,
    CONTRIBUTIONS_PER_YEAR,
    CREDIT_HOURS,
    DATE_UNITS,
    DRINK_TYPES,
    GRADES,
)

DAYS_OF_WEEK = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

GENDER_CHOICES = [("male", "Male"), ("female", "Female")]
WEIGHT_UNIT_CHOICES = [("kg", "kg"), ("lbs", "lbs")]
HEIGHT_UNIT_CHOICES = [("cm", "cm"), ("in", "in")]
COMPOUND_CHOICES = [(key, key.capitalize()) for key in COMPOUNDS_PER_YEAR]


class LenientFloatField(FloatField):
    """FloatField that falls back to its default instead of failing on bad text."""

    def process_formdata(self, valuelist):
        if not valuelist:
            return
        try:
            value = float(valuelist[0])
        except (TypeError, ValueError):
            value = None
        if value is None or not math.isfinite(value):
            value = self.default
        self.data = value


class LenientIntegerField(IntegerField):
    """IntegerField that falls back to its default instead of failing on bad text."""

    def process_formdata(self, valuelist):
        if not valuelist:
            return
        try:
            self.data = int(valuelist[0])
        except (TypeError, ValueError):
            self.data = self.default


# --- Financial ---

class MortgageForm(FlaskForm):
    home_price = LenientFloatField("Home Price ($)", default=300000)
    down_payment = LenientFloatField("Down Payment ($)", default=60000)
    loan_term = LenientIntegerField("Loan Term (years)", default=30)
    interest_rate = LenientFloatField("Interest Rate (%)", default=4.5)
    property_tax = LenientFloatField("Property Tax (% per year)", default=1.2)
    home_insurance = LenientFloatField("Home Insurance ($ per year)", default=1200)


class LoanForm(FlaskForm):
    loan_amount = LenientFloatField("Loan Amount ($)", default=250000)
    interest_rate = LenientFloatField("Interest Rate (%)", default=5.5)
    loan_term = LenientIntegerField("Loan Term (years)", default=30)
    down_payment = LenientFloatField("Down Payment ($)", default=50000)
    extra_payment = LenientFloatField("Extra Monthly Payment ($)", default=0)


class InterestForm(FlaskForm):
    interest_type = SelectField(
        "Interest Type",
        choices=[("simple", "Simple Interest"), ("compound", "Compound Interest")],
        default="compound",
    )
    principal = LenientFloatField("Principal ($)", default=10000)
    interest_rate = LenientFloatField("Annual Interest Rate (%)", default=5)
    years = LenientIntegerField("Time Period (years)", default=5)
    compound_frequency = SelectField(
        "Compound Frequency",
        choices=COMPOUND_CHOICES,
        default="monthly",
        description="Compound interest only",
    )
    annual_contribution = LenientFloatField("Annual Contribution ($)", default=0)


class CreditCardPayoffForm(FlaskForm):
    balance = LenientFloatField("Card Balance ($)", default=5000)
    interest_rate = LenientFloatField("Interest Rate (APR %)", default=18.9)
    payoff_mode = SelectField(
        "Payoff Goal",
        choices=[("fixed", "Fixed monthly payment"), ("time", "Pay off within a time frame")],
        default="fixed",
    )
    monthly_payment = LenientFloatField("Monthly Payment ($)", default=200)
    payoff_months = LenientIntegerField("Months to Pay Off", default=36)


class RetirementForm(FlaskForm):
    current_age = LenientIntegerField("Current Age", default=30)
    retirement_age = LenientIntegerField("Retirement Age", default=65)
    years_in_retirement = LenientIntegerField("Years in Retirement", default=30)
    current_savings = LenientFloatField("Current Savings ($)", default=50000)
    monthly_contribution = LenientFloatField("Monthly Contribution ($)", default=500)
    annual_expenses = LenientFloatField("Annual Expenses in Retirement ($, today's money)", default=60000)
    inflation_rate = LenientFloatField("Inflation Rate (%)", default=2.5)
    annual_return = LenientFloatField("Return Before Retirement (%)", default=7)
    retirement_return = LenientFloatField("Return During Retirement (%)", default=5)


class InvestmentForm(FlaskForm):
    initial_investment = LenientFloatField("Initial Investment ($)", default=10000)
    monthly_contribution = LenientFloatField("Monthly Contribution ($)", default=500)
    annual_return = LenientFloatField("Expected Annual Return (%)", default=8)
    years = LenientIntegerField("Investment Length (years)", default=20)
    compound_frequency = SelectField("Compound Frequency", choices=COMPOUND_CHOICES, default="monthly")


class CompoundInterestForm(FlaskForm):
    principal = LenientFloatField("Initial Investment ($)", default=5000)
    contribution = LenientFloatField("Additional Contribution ($)", default=100)
    contribution_frequency = SelectField(
        "Contribution Frequency",
        choices=[(key, key.capitalize()) for key in CONTRIBUTIONS_PER_YEAR],
        default="monthly",
    )
    interest_rate = LenientFloatField("Annual Interest Rate (%)", default=7)
    years = LenientIntegerField("Years", default=10)
    compound_frequency = SelectField("Compound Frequency", choices=COMPOUND_CHOICES, default="annually")
    include_inflation = BooleanField("Adjust for inflation", default=False)
    inflation_rate = LenientFloatField("Inflation Rate (%)", default=2.5)


# --- Health ---

class BMIForm(FlaskForm):
    units = SelectField(
        "Units",
        choices=[("metric", "Metric (cm, kg)"), ("imperial", "Imperial (ft/in, lbs)")],
        default="metric",
    )
    height_cm = LenientFloatField("Height (cm)", default=170)
    weight_kg = LenientFloatField("Weight (kg)", default=70)
    height_ft = LenientFloatField("Height (ft)", default=5)
    height_in = LenientFloatField("Height (in)", default=10)
    weight_lbs = LenientFloatField("Weight (lbs)", default=154)


class CalorieForm(FlaskForm):
    units = SelectField(
        "Units",
        choices=[("metric", "Metric (kg, cm)"), ("imperial", "Imperial (lbs, in)")],
        default="metric",
    )
    gender = SelectField("Gender", choices=GENDER_CHOICES, default="male")
    age = LenientIntegerField("Age", default=30)
    weight = LenientFloatField("Weight", default=70)
    height = LenientFloatField("Height", default=170)
    activity = SelectField(
        "Activity Level",
        choices=[
            ("sedentary", "Sedentary (little or no exercise)"),
            ("light", "Lightly active (1-3 days/week)"),
            ("moderate", "Moderately active (3-5 days/week)"),
            ("active", "Very active (6-7 days/week)"),
            ("very_active", "Extra active (physical job or twice a day)"),
        ],
        default="moderate",
    )
    goal = SelectField(
        "Goal",
        choices=[("lose", "Lose weight"), ("maintain", "Maintain weight"), ("gain", "Gain weight")],
        default="maintain",
    )


class BodyFatForm(FlaskForm):
    method = SelectField(
        "Method",
        choices=[
            ("navy", "U.S. Navy (tape measure)"),
            ("skinfold", "Skinfold (3-site)"),
            ("bmi", "BMI estimate"),
        ],
        default="navy",
    )
    gender = SelectField("Gender", choices=GENDER_CHOICES, default="male")
    age = LenientIntegerField("Age", default=30)
    height = LenientFloatField("Height (cm)", default=175)
    weight = LenientFloatField("Weight (kg)", default=75)
    waist = LenientFloatField("Waist (cm)", default=85)
    neck = LenientFloatField("Neck (cm)", default=38)
    hip = LenientFloatField("Hip (cm, women only)", default=100)
    chest = LenientFloatField("Chest skinfold (mm, men)", default=15)
    abdomen = LenientFloatField("Abdomen skinfold (mm, men)", default=20)
    thigh = LenientFloatField("Thigh skinfold (mm)", default=15)
    tricep = LenientFloatField("Tricep skinfold (mm, women)", default=15)
    suprailiac = LenientFloatField("Suprailiac skinfold (mm, women)", default=15)


class PregnancyForm(FlaskForm):
    method = SelectField(
        "Calculate From",
        choices=[("lmp", "First day of last period"), ("conception", "Conception date")],
        default="lmp",
    )
    known_date = DateField("Date", validators=[Optional()], default=date.today)
    cycle_length = LenientIntegerField("Average Cycle Length (days)", default=28)


# --- Math ---

class ScientificForm(FlaskForm):
    expression = StringField(
        "Expression",
        default="2^10 + sqrt(16)",
        validators=[Length(max=MAX_EXPRESSION_LENGTH)],
        description="Supports + - × ÷ ^ %, pi, e, sin, cos, tan, log, ln, sqrt, abs and fact",
    )
    angle_mode = SelectField(
        "Angle Mode",
        choices=[("deg", "Degrees"), ("rad", "Radians")],
        default="deg",
    )


class FractionForm(FlaskForm):
    numerator1 = LenientIntegerField("Numerator", default=1)
    denominator1 = LenientIntegerField("Denominator", default=2)
    operation = SelectField(
        "Operation",
        choices=[("add", "+"), ("subtract", "-"), ("multiply", "×"), ("divide", "÷")],
        default="add",
    )
    numerator2 = LenientIntegerField("Numerator", default=1)
    denominator2 = LenientIntegerField("Denominator", default=4)


class PercentageForm(FlaskForm):
    mode = SelectField(
        "Problem Type",
        choices=[
            ("find_percentage", "What is X% of Y?"),
            ("find_change", "Percentage change from X to Y"),
            ("find_value", "X is Y% of what?"),
            ("find_reverse", "Original value before a % increase"),
        ],
        default="find_percentage",
    )
    percentage_value = LenientFloatField("Percentage (%)", default=10)
    base_value = LenientFloatField("Of Value", default=100)
    original_value = LenientFloatField("Original Value", default=100)
    new_value = LenientFloatField("New Value", default=120)
    known_value = LenientFloatField("Known Value", default=75)
    target_percentage = LenientFloatField("Is What Percentage (%)", default=25)
    final_value = LenientFloatField("Final Value", default=120)
    applied_percentage = LenientFloatField("Applied Increase (%)", default=20)


class TriangleForm(FlaskForm):
    mode = SelectField(
        "Known Values",
        choices=[("base-height", "Base and Height"), ("sides", "Three Sides")],
        default="base-height",
    )
    base = LenientFloatField("Base", default=5)
    height = LenientFloatField("Height", default=4)
    side_a = LenientFloatField("Side A", default=3)
    side_b = LenientFloatField("Side B", default=4)
    side_c = LenientFloatField("Side C", default=5)


class StatisticsForm(FlaskForm):
    data_set = TextAreaField(
        "Data Set",
        default="5, 10, 15, 20, 25",
        description="Separate numbers with commas, spaces or new lines",
    )
    mode = SelectField(
        "Data Type",
        choices=[("sample", "Sample"), ("population", "Population")],
        default="sample",
    )


class QuadraticForm(FlaskForm):
    a = LenientFloatField("a", default=1)
    b = LenientFloatField("b", default=3)
    c = LenientFloatField("c", default=-4)


class PermutationCombinationForm(FlaskForm):
    mode = SelectField(
        "Calculation Type",
        choices=[("permutation", "Permutation (nPr)"), ("combination", "Combination (nCr)")],
        default="permutation",
    )
    n = LenientIntegerField("Total items (n)", default=5)
    r = LenientIntegerField("Items chosen (r)", default=3)


# --- General ---

class AgeForm(FlaskForm):
    # Required-ness is checked by the handler so the notice reads naturally
    birth_date = DateField("Birth Date", validators=[Optional()])
    as_of = DateField("Age at Date (defaults to today)", validators=[Optional()], default=date.today)


class DateCalculatorForm(FlaskForm):
    mode = SelectField(
        "Calculation",
        choices=[("difference", "Days between two dates"), ("add", "Add to a date"), ("subtract", "Subtract from a date")],
        default="difference",
    )
    start_date = DateField("Start Date", validators=[Optional()], default=date.today)
    end_date = DateField("End Date", validators=[Optional()], default=date.today)
    base_date = DateField("Date", validators=[Optional()], default=date.today)
    amount = LenientIntegerField("Amount", default=30)
    unit = SelectField("Unit", choices=[(unit, unit.capitalize()) for unit in DATE_UNITS], default="days")


class TimeCalculatorForm(FlaskForm):
    hours1 = LenientIntegerField("Hours", default=1)
    minutes1 = LenientIntegerField("Minutes", default=30)
    seconds1 = LenientIntegerField("Seconds", default=0)
    operation = SelectField("Operation", choices=[("add", "+"), ("subtract", "-")], default="add")
    hours2 = LenientIntegerField("Hours", default=0)
    minutes2 = LenientIntegerField("Minutes", default=45)
    seconds2 = LenientIntegerField("Seconds", default=30)


class TimeEntryForm(Form):
    """One row of the time sheet. Plain Form: CSRF lives on the parent."""

    day = SelectField("Day", choices=[(d, d) for d in DAYS_OF_WEEK], default="Monday")
    start_time = StringField("Start", default="09:00", validators=[Length(max=5)],
                             render_kw={"size": 5, "placeholder": "HH:MM"})
    end_time = StringField("End", default="17:00", validators=[Length(max=5)],
                           render_kw={"size": 5, "placeholder": "HH:MM"})
    break_minutes = LenientIntegerField("Break (min)", default=60)


class HoursForm(FlaskForm):
    entries = FieldList(FormField(TimeEntryForm), min_entries=1)
    hourly_rate = LenientFloatField("Hourly Rate ($)", default=15)


class CourseForm(Form):
    course = StringField("Course", default="", validators=[Length(max=100)])
    grade = SelectField("Grade", choices=[(value, label) for value, label, _ in GRADES], default="a")
    credits = SelectField("Credits", choices=[(n, str(n)) for n in CREDIT_HOURS], coerce=int, default=3)


class GPAForm(FlaskForm):
    courses = FieldList(
        FormField(CourseForm),
        min_entries=1,
        default=[
            {"course": "Course 1", "grade": "a", "credits": 3},
            {"course": "Course 2", "grade": "b+", "credits": 4},
        ],
    )


class PasswordForm(FlaskForm):
    length = LenientIntegerField("Password Length", default=16, description="8 to 32 characters")
    uppercase = BooleanField("Uppercase letters (A-Z)", default=True)
    lowercase = BooleanField("Lowercase letters (a-z)", default=True)
    numbers = BooleanField("Numbers (0-9)", default=True)
    symbols = BooleanField("Symbols (!@#$%^&*)", default=True)
    # Filled in on Generate so a restored result shows the same password
    password = HiddenField()


class UnitConverterForm(FlaskForm):
    value = StringField("Value", default="1")
    from_unit = SelectField("From", choices=unit_choices(), default="length:meter")
    to_unit = SelectField("To", choices=unit_choices(), default="length:foot")


# --- Fun ---

class LoveForm(FlaskForm):
    name1 = StringField("Your Name", default="", validators=[Length(max=50)])
    name2 = StringField("Their Name", default="", validators=[Length(max=50)])


class LuckyNumberForm(FlaskForm):
    name = StringField("Full Name", default="", validators=[Length(max=100)])
    birth_date = DateField("Birth Date", validators=[Optional()])


class PetAgeForm(FlaskForm):
    pet_type = SelectField("Pet", choices=[("dog", "Dog"), ("cat", "Cat")], default="dog")
    pet_age = LenientFloatField("Age (years)", default=1)
    pet_weight = LenientFloatField("Weight (lbs, dogs only)", default=20)


class ActivityEntryForm(Form):
    activity = SelectField("Activity", choices=[(name, name) for name in ACTIVITY_METS],
                           default="Walking (3 mph)")
    duration = LenientIntegerField("Minutes", default=30)


class CalorieBurnForm(FlaskForm):
    gender = SelectField("Gender", choices=GENDER_CHOICES, default="male")
    age = LenientIntegerField("Age", default=30)
    weight = LenientFloatField("Weight", default=70)
    weight_unit = SelectField("Weight Unit", choices=WEIGHT_UNIT_CHOICES, default="kg")
    height = LenientFloatField("Height", default=170)
    height_unit = SelectField("Height Unit", choices=HEIGHT_UNIT_CHOICES, default="cm")
    activities = FieldList(FormField(ActivityEntryForm), min_entries=1)


class DrinkEntryForm(Form):
    drink_type = SelectField("Drink", choices=[(key, value[0]) for key, value in DRINK_TYPES.items()],
                             default="beer")
    alcohol_percent = LenientFloatField("Alcohol % (custom)", default=5)
    serving_ml = LenientFloatField("Serving ml (custom)", default=355)
    quantity = LenientIntegerField("Quantity", default=1)
    hours_ago = LenientFloatField("Hours Ago", default=0)


class AlcoholForm(FlaskForm):
    gender = SelectField("Gender", choices=GENDER_CHOICES, default="male")
    weight = LenientFloatField("Weight", default=70)
    weight_unit = SelectField("Weight Unit", choices=WEIGHT_UNIT_CHOICES, default="kg")
    food_intake = SelectField(
        "Food in Stomach",
        choices=[("empty", "Empty stomach"), ("light", "Light meal"), ("full", "Full meal")],
        default="light",
    )
    drinks = FieldList(FormField(DrinkEntryForm), min_entries=1)


class BingeWatchForm(FlaskForm):
    show_name = StringField("Show Name", default="Stranger Things", validators=[Length(max=100)])
    seasons = LenientIntegerField("Seasons", default=4)
    episodes_per_season = LenientIntegerField("Episodes per Season", default=8)
    episode_length = LenientIntegerField("Episode Length (minutes)", default=50)
    hours_per_day = LenientFloatField("Viewing Hours per Day", default=3)
    skip_intro = BooleanField("Skip intros", default=True)
    intro_length = LenientIntegerField("Intro Length (seconds)", default=60)
