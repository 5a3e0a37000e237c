"""
Display formatting for calculator results.
Used by the calculator handlers to build the summary lines shown on the page and in the PDF report.
"""
import re


def format_currency(amount):
    """US dollars with thousands separators and no cents, e.g. '$1,520'."""
    rounded = round(amount)
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,}"


def format_money(amount):
    """US dollars with cents, e.g. '$1,520.40'."""
    sign = "-" if round(amount, 2) < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def format_number(number, decimals=2):
    return f"{number:.{decimals}f}"


def format_compact(number):
    """Whole numbers without decimals, everything else to two places."""
    if float(number).is_integer():
        return f"{int(number)}"
    return f"{number:.2f}"


def format_date(value):
    """Long US date, e.g. 'March 1, 2023'."""
    return f"{value.strftime('%B')} {value.day}, {value.year}"


def format_date_with_weekday(value):
    """e.g. 'Wednesday, March 1, 2023'."""
    return f"{value.strftime('%A')}, {format_date(value)}"


def to_title_case(text):
    return re.sub(
        r"\w\S*",
        lambda match: match.group(0)[0].upper() + match.group(0)[1:].lower(),
        text,
    )
