"""
Safe arithmetic expression evaluation for the scientific calculator.

Expressions are parsed with the `ast` module and walked node by node; only
numbers, the constants pi and e, arithmetic operators and a fixed set of
functions are accepted. Nothing is ever passed to eval().
"""
import ast
import math

from app.projects.calculators.core.formulas import MAX_FACTORIAL_N

MAX_EXPRESSION_LENGTH = 200

CONSTANTS = {"pi": math.pi, "e": math.e}

ANGLE_MODES = ("deg", "rad")


class ExpressionError(ValueError):
    """Raised when an expression uses syntax or names that are not allowed."""


def _factorial(value):
    if value != int(value) or value < 0:
        raise ValueError("factorial needs a non-negative whole number")
    if value > MAX_FACTORIAL_N:
        raise OverflowError("factorial too large")
    return float(math.factorial(int(value)))


def _functions(angle_mode):
    to_radians = math.radians if angle_mode == "deg" else (lambda x: x)
    return {
        "sin": lambda x: math.sin(to_radians(x)),
        "cos": lambda x: math.cos(to_radians(x)),
        "tan": lambda x: math.tan(to_radians(x)),
        "log": math.log10,
        "ln": math.log,
        "sqrt": math.sqrt,
        "abs": abs,
        "fact": _factorial,
    }


_BINARY_OPERATORS = {
    ast.Add: lambda a, b: a + b,
    ast.Sub: lambda a, b: a - b,
    ast.Mult: lambda a, b: a * b,
    ast.Div: lambda a, b: a / b,
    ast.Mod: lambda a, b: a % b,
    ast.Pow: math.pow,
}

_UNARY_OPERATORS = {
    ast.UAdd: lambda a: a,
    ast.USub: lambda a: -a,
}


def _normalise(expression):
    return expression.replace("×", "*").replace("÷", "/").replace("^", "**")


def _evaluate_node(node, functions):
    if isinstance(node, ast.Expression):
        return _evaluate_node(node.body, functions)

    if isinstance(node, ast.Constant):
        if isinstance(node.value, bool) or not isinstance(node.value, (int, float)):
            raise ExpressionError("Only numbers are allowed")
        return float(node.value)

    if isinstance(node, ast.Name):
        if node.id not in CONSTANTS:
            raise ExpressionError(f"Unknown name: {node.id}")
        return CONSTANTS[node.id]

    if isinstance(node, ast.BinOp):
        operator = _BINARY_OPERATORS.get(type(node.op))
        if operator is None:
            raise ExpressionError("Unsupported operator")
        return operator(_evaluate_node(node.left, functions), _evaluate_node(node.right, functions))

    if isinstance(node, ast.UnaryOp):
        operator = _UNARY_OPERATORS.get(type(node.op))
        if operator is None:
            raise ExpressionError("Unsupported operator")
        return operator(_evaluate_node(node.operand, functions))

    if isinstance(node, ast.Call):
        if not isinstance(node.func, ast.Name) or node.func.id not in functions:
            raise ExpressionError("Unknown function")
        if len(node.args) != 1 or node.keywords:
            raise ExpressionError(f"{node.func.id}() takes exactly one argument")
        return functions[node.func.id](_evaluate_node(node.args[0], functions))

    raise ExpressionError("Unsupported expression")


def evaluate(expression: str, angle_mode: str = "deg") -> float:
    """
    Evaluate a calculator expression.

    Args:
        expression: e.g. "2^10 + sqrt(16)", "sin(30) * 2", "fact(5) / 3"
        angle_mode: 'deg' or 'rad' for the trigonometric functions

    Returns:
        float: the value rounded to 8 decimal places

    Raises:
        ExpressionError: empty, too long, malformed or disallowed input
        ZeroDivisionError: division or modulo by zero
        ValueError: a math domain error such as sqrt(-1)
        OverflowError: the value is too large to represent
    """
    text = (expression or "").strip()
    if not text:
        raise ExpressionError("Please enter an expression")
    if len(text) > MAX_EXPRESSION_LENGTH:
        raise ExpressionError(f"Expressions must be {MAX_EXPRESSION_LENGTH} characters or fewer")
    text = _normalise(text)

    try:
        tree = ast.parse(text, mode="eval")
    except SyntaxError as e:
        raise ExpressionError("Invalid expression") from e

    value = _evaluate_node(tree, _functions(angle_mode))
    if not math.isfinite(value):
        raise OverflowError("result is not finite")
    return round(value, 8)
