"""
Unit tables for the unit converter.
Each unit's factor converts it to the base unit of its type
(metre, kilogram, litre, square metre, metre/second, second, byte).
Temperature has no factors and goes through Celsius instead.
"""

UNIT_TYPES = [
    ("length", "Length"),
    ("weight", "Weight"),
    ("volume", "Volume"),
    ("temperature", "Temperature"),
    ("area", "Area"),
    ("speed", "Speed"),
    ("time", "Time"),
    ("digital", "Digital Storage"),
]

UNITS = {
    "length": [
        ("meter", "Meter (m)", 1),
        ("kilometer", "Kilometer (km)", 1000),
        ("centimeter", "Centimeter (cm)", 0.01),
        ("millimeter", "Millimeter (mm)", 0.001),
        ("inch", "Inch (in)", 0.0254),
        ("foot", "Foot (ft)", 0.3048),
        ("yard", "Yard (yd)", 0.9144),
        ("mile", "Mile (mi)", 1609.34),
    ],
    "weight": [
        ("kilogram", "Kilogram (kg)", 1),
        ("gram", "Gram (g)", 0.001),
        ("milligram", "Milligram (mg)", 0.000001),
        ("pound", "Pound (lb)", 0.453592),
        ("ounce", "Ounce (oz)", 0.0283495),
        ("ton", "Metric Ton (t)", 1000),
        ("stone", "Stone (st)", 6.35029),
    ],
    "volume": [
        ("liter", "Liter (L)", 1),
        ("milliliter", "Milliliter (mL)", 0.001),
        ("cubic_meter", "Cubic Meter (m³)", 1000),
        ("gallon", "Gallon (US gal)", 3.78541),
        ("quart", "Quart (US qt)", 0.946353),
        ("pint", "Pint (US pt)", 0.473176),
        ("cup", "Cup (US cup)", 0.24),
        ("fluid_ounce", "Fluid Ounce (US fl oz)", 0.0295735),
        ("tablespoon", "Tablespoon (tbsp)", 0.0147868),
        ("teaspoon", "Teaspoon (tsp)", 0.00492892),
    ],
    "temperature": [
        ("celsius", "Celsius (°C)", None),
        ("fahrenheit", "Fahrenheit (°F)", None),
        ("kelvin", "Kelvin (K)", None),
    ],
    "area": [
        ("square_meter", "Square Meter (m²)", 1),
        ("square_kilometer", "Square Kilometer (km²)", 1000000),
        ("square_centimeter", "Square Centimeter (cm²)", 0.0001),
        ("square_millimeter", "Square Millimeter (mm²)", 0.000001),
        ("square_inch", "Square Inch (in²)", 0.00064516),
        ("square_foot", "Square Foot (ft²)", 0.092903),
        ("square_yard", "Square Yard (yd²)", 0.836127),
        ("acre", "Acre", 4046.86),
        ("hectare", "Hectare (ha)", 10000),
    ],
    "speed": [
        ("meters_per_second", "Meters per Second (m/s)", 1),
        ("kilometers_per_hour", "Kilometers per Hour (km/h)", 0.277778),
        ("miles_per_hour", "Miles per Hour (mph)", 0.44704),
        ("knot", "Knot (kn)", 0.514444),
        ("feet_per_second", "Feet per Second (ft/s)", 0.3048),
    ],
    "time": [
        ("second", "Second (s)", 1),
        ("minute", "Minute (min)", 60),
        ("hour", "Hour (h)", 3600),
        ("day", "Day (d)", 86400),
        ("week", "Week (wk)", 604800),
        ("month", "Month (avg)", 2628000),
        ("year", "Year (yr)", 31536000),
    ],
    "digital": [
        ("byte", "Byte (B)", 1),
        ("kilobyte", "Kilobyte (KB)", 1024),
        ("megabyte", "Megabyte (MB)", 1048576),
        ("gigabyte", "Gigabyte (GB)", 1073741824),
        ("terabyte", "Terabyte (TB)", 1099511627776),
        ("petabyte", "Petabyte (PB)", 1125899906842624),
        ("bit", "Bit (b)", 0.125),
        ("kibibyte", "Kibibyte (KiB)", 1024),
        ("mebibyte", "Mebibyte (MiB)", 1048576),
        ("gibibyte", "Gibibyte (GiB)", 1073741824),
    ],
}


def get_unit(unit_type, unit_id):
    """(id, name, factor) for a unit, or None if the type has no such unit."""
    return next((u for u in UNITS.get(unit_type, []) if u[0] == unit_id), None)


def unit_choices():
    """All units as (value, label) pairs for a select field, value = 'type:id'."""
    choices = []
    for unit_type, type_name in UNIT_TYPES:
        for unit_id, name, _ in UNITS[unit_type]:
            choices.append((f"{unit_type}:{unit_id}", f"{type_name}: {name}"))
    return choices


def convert_value(value, from_factor, to_factor):
    return value * (from_factor / to_factor)


def convert_temperature(value, from_unit, to_unit):
    """Convert through Celsius. Unknown units return None."""
    if from_unit == "celsius":
        celsius = value
    elif from_unit == "fahrenheit":
        celsius = (value - 32) * (5 / 9)
    elif from_unit == "kelvin":
        celsius = value - 273.15
    else:
        return None

    if to_unit == "celsius":
        return celsius
    if to_unit == "fahrenheit":
        return (celsius * (9 / 5)) + 32
    if to_unit == "kelvin":
        return celsius + 273.15
    return None


def convert(value, unit_type, from_unit, to_unit):
    """
    Convert `value` between two units of the same type.

    Returns:
        tuple: (converted_value, error_message); converted_value is None on error.
    """
    if unit_type not in UNITS:
        return None, "Invalid unit selection"
    if unit_type == "temperature":
        converted = convert_temperature(value, from_unit, to_unit)
        if converted is None:
            return None, "Invalid unit selection"
        return converted, None

    source = get_unit(unit_type, from_unit)
    target = get_unit(unit_type, to_unit)
    if not source or not target:
        return None, "Invalid unit selection"
    return convert_value(value, source[2], target[2]), None
