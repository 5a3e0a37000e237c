"""
Calculator Registry - Centralized catalogue of every calculator in the hub.

To add a new calculator:
1. Add its form to app/projects/calculators/forms.py
2. Add its handler and report lines to app/projects/calculators/handlers.py
3. Add an entry to CALCULATOR_HANDLERS (row actions and a row label if the form has a FieldList)
4. Add an entry to CALCULATORS below with status 'active'

Statuses:
- 'active': Working calculator with a form and results
- 'coming_soon': Listed in the catalogue, renders a placeholder page
"""

CATEGORIES = [
    {
        'id': 'financial',
        'name': 'Financial',
        'description': 'Mortgages, loans, interest and savings',
        'icon': '💵',
        'order': 1
    },
    {
        'id': 'health',
        'name': 'Health & Fitness',
        'description': 'Body measurements, nutrition and exercise',
        'icon': '❤️',
        'order': 2
    },
    {
        'id': 'math',
        'name': 'Math & Statistics',
        'description': 'Fractions, equations, geometry and statistics',
        'icon': '➗',
        'order': 3
    },
    {
        'id': 'general',
        'name': 'General',
        'description': 'Dates, time, grades, passwords and unit conversion',
        'icon': '🕒',
        'order': 4
    },
    {
        'id': 'fun',
        'name': 'Fun & Games',
        'description': 'Lighthearted calculators for pets, shows and more',
        'icon': '✨',
        'order': 5
    },
]


def _calculator(calc_id, name, description, category, order, status='active', featured=False):
    return {
        'id': calc_id,
        'name': name,
        'description': description,
        'category': category,
        'url': f'/calculators/{category}/{calc_id}',
        'status': status,
        'featured': featured,
        'order': order,
    }


CALCULATORS = [
    # Financial
    _calculator('mortgage', 'Mortgage Calculator',
                'Calculate your monthly mortgage payments based on various factors.',
                'financial', 101, featured=True),
    _calculator('loan', 'Loan Calculator',
                'Calculate loan payments, interest, and amortization schedules.',
                'financial', 102),
    _calculator('auto-loan', 'Auto Loan Calculator',
                'Calculate car loan payments and total interest over the loan term.',
                'financial', 103, status='coming_soon'),
    _calculator('interest', 'Interest Calculator',
                'Calculate simple and compound interest on your investments.',
                'financial', 104),
    _calculator('credit-card-payoff', 'Credit Card Payoff Calculator',
                'Calculate how long it will take to pay off your credit card debt.',
                'financial', 105),
    _calculator('retirement', 'Retirement Calculator',
                'Plan your retirement savings and forecast your future finances.',
                'financial', 106, featured=True),
    _calculator('investment', 'Investment Calculator',
                'Analyze returns on investments with customizable variables.',
                'financial', 107),
    _calculator('compound-interest', 'Compound Interest Calculator',
                'See the power of compound interest on your savings over time.',
                'financial', 108),

    # Health
    _calculator('bmi', 'BMI Calculator',
                'Calculate your Body Mass Index to assess your weight relative to height.',
                'health', 201, featured=True),
    _calculator('calorie', 'Calorie Calculator',
                'Calculate your daily calorie needs based on activity level and goals.',
                'health', 202),
    _calculator('body-fat', 'Body Fat Calculator',
                'Estimate your body fat percentage using various measurement methods.',
                'health', 203),
    _calculator('pregnancy', 'Pregnancy Calculator',
                'Calculate important pregnancy dates and milestones.',
                'health', 204),
    _calculator('water-intake', 'Water Intake Calculator',
                'Determine your recommended daily water intake based on various factors.',
                'health', 205, status='coming_soon'),
    _calculator('macro-nutrient', 'Macro Nutrient Calculator',
                'Calculate your ideal macronutrient ratios for your fitness goals.',
                'health', 206, status='coming_soon'),
    _calculator('heart-rate-zone', 'Heart Rate Zone Calculator',
                'Calculate your target heart rate zones for effective workouts.',
                'health', 207, status='coming_soon'),
    _calculator('one-rep-max', 'One Rep Max Calculator',
                'Estimate your one-repetition maximum for various strength exercises.',
                'health', 208, status='coming_soon'),

    # Math
    _calculator('scientific', 'Scientific Calculator',
                'Perform advanced scientific calculations with this versatile tool.',
                'math', 301, featured=True),
    _calculator('fraction', 'Fraction Calculator',
                'Add, subtract, multiply, and divide fractions with ease.',
                'math', 302),
    _calculator('percentage', 'Percentage Calculator',
                'Calculate percentages, increases, decreases, and differences.',
                'math', 303),
    _calculator('random-number', 'Random Number Generator',
                'Generate random numbers with customizable parameters.',
                'math', 304, status='coming_soon'),
    _calculator('triangle', 'Triangle Calculator',
                'Calculate properties of triangles including area and perimeter.',
                'math', 305),
    _calculator('standard-deviation', 'Standard Deviation Calculator',
                'Calculate statistical measures including standard deviation.',
                'math', 306),
    _calculator('quadratic-equation', 'Quadratic Equation Solver',
                'Solve quadratic equations and find real or complex roots.',
                'math', 307),
    _calculator('permutation-combination', 'Permutation & Combination Calculator',
                'Calculate permutations and combinations for given sets.',
                'math', 308),

    # General
    _calculator('age', 'Age Calculator',
                'Calculate exact age between two dates in years, months, and days.',
                'general', 401, featured=True),
    _calculator('date', 'Date Calculator',
                'Calculate the difference between dates or add/subtract days.',
                'general', 402),
    _calculator('time', 'Time Calculator',
                'Add or subtract hours, minutes, and seconds with precision.',
                'general', 403),
    _calculator('hours', 'Hours Calculator',
                'Calculate work hours and pay for timesheet management.',
                'general', 404),
    _calculator('gpa', 'GPA Calculator',
                'Calculate your Grade Point Average based on course grades and credits.',
                'general', 405),
    _calculator('password-generator', 'Password Generator',
                'Generate secure, random passwords with customizable parameters.',
                'general', 406),
    _calculator('unit-converter', 'Unit Converter',
                'Convert between different units of measurement.',
                'general', 407),
    _calculator('currency-converter', 'Currency Converter',
                'Convert between different currencies with up-to-date exchange rates.',
                'general', 408, status='coming_soon'),

    # Fun
    _calculator('love', 'Love Calculator',
                'Test compatibility and find your love score with this fun calculator.',
                'fun', 501, featured=True),
    _calculator('lucky-number', 'Lucky Number Calculator',
                'Discover your lucky numbers based on your name and birth date.',
                'fun', 502),
    _calculator('pet-age', 'Pet Age Calculator',
                "Convert your pet's age to human years for dogs and cats.",
                'fun', 503),
    _calculator('calorie-burn', 'Daily Calorie Burn Estimate',
                'Estimate calories burned during different activities.',
                'fun', 504),
    _calculator('alcohol-consumption', 'Alcohol Consumption Calculator',
                'Estimate blood alcohol content based on drinks consumed.',
                'fun', 505),
    _calculator('binge-watch', 'Binge-Watch Time Calculator',
                'Calculate how long it will take to watch an entire series.',
                'fun', 506),
    _calculator('social-media-engagement', 'Social Media Engagement Calculator',
                'Calculate engagement rates for your social media content.',
                'fun', 507, status='coming_soon'),
    _calculator('name-numerology', 'Name Numerology Calculator',
                'Discover the numerological significance of your name.',
                'fun', 508, status='coming_soon'),
]


def get_all_calculators():
    """
    Get all calculators from the registry.

    Returns:
        list: List of all calculators sorted by order
    """
    return sorted(CALCULATORS, key=lambda x: x['order'])


def get_active_calculators():
    """
    Get only calculators that are implemented.

    Returns:
        list: List of active calculators
    """
    return [c for c in get_all_calculators() if c['status'] == 'active']


def get_featured_calculators():
    """Active calculators flagged for the homepage."""
    return [c for c in get_active_calculators() if c['featured']]


def get_calculator_by_id(calc_id):
    """
    Get a specific calculator by its ID.

    Args:
        calc_id (str): The calculator ID (also its URL slug)

    Returns:
        dict: Calculator data or None if not found
    """
    return next((c for c in CALCULATORS if c['id'] == calc_id), None)


def get_all_categories():
    return sorted(CATEGORIES, key=lambda x: x['order'])


def get_category_by_id(category_id):
    return next((c for c in CATEGORIES if c['id'] == category_id), None)


def get_calculators_by_category(category_id):
    """
    Get all calculators belonging to a specific category.

    Args:
        category_id (str): The category ID

    Returns:
        list: Calculators with an 'available' flag set for active ones
    """
    calculators = []
    for calculator in get_all_calculators():
        if calculator['category'] == category_id:
            calculator_copy = calculator.copy()
            calculator_copy['available'] = calculator['status'] == 'active'
            calculators.append(calculator_copy)
    return calculators


def search_calculators(term='', category_id='all'):
    """
    Filter the catalogue by a search term and category.

    The term is matched case-insensitively against name and description.
    A category of 'all' (or empty) matches every category.

    Args:
        term (str): Search text, may be empty
        category_id (str): Category ID or 'all'

    Returns:
        list: Matching calculators with an 'available' flag set
    """
    term = (term or '').strip().lower()
    results = []
    for calculator in get_all_calculators():
        matches_search = (
            term in calculator['name'].lower() or
            term in calculator['description'].lower()
        )
        matches_category = (
            not category_id or category_id == 'all' or
            calculator['category'] == category_id
        )
        if matches_search and matches_category:
            calculator_copy = calculator.copy()
            calculator_copy['available'] = calculator['status'] == 'active'
            results.append(calculator_copy)
    return results
