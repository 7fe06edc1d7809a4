"""
Utilities module for the fight engine.

Provides console printing with rich formatting and the small integer helpers
shared by the stat model, the effect engine and the resolver.
"""

from typing import Any

from rich.console import Console
from rich.rule import Rule

# Initialize the rich console.
_console = Console(markup=True, width=120, force_terminal=True, force_jupyter=False)


def cprint(*args: Any, **kwargs: Any) -> None:
    """
    Custom print function to handle colored output.

    Args:
        *args: Arguments to pass to the console print function.
        **kwargs: Keyword arguments to pass to the console print function.

    """
    _console.print(*args, **kwargs)


def crule(*args: Any, **kwargs: Any) -> None:
    """
    Custom print function to handle colored output with a rule.

    Args:
        *args: Arguments to pass to the Rule constructor.
        **kwargs: Keyword arguments to pass to the Rule constructor.

    """
    _console.print(Rule(*args, **kwargs))


def make_bar(current: int, maximum: int, length: int = 10, color: str = "white") -> str:
    """
    Creates a visual progress bar representation.

    Args:
        current (int): The current value.
        maximum (int): The maximum value.
        length (int): The length of the bar in characters. Defaults to 10.
        color (str): The color for the filled portion. Defaults to "white".

    Returns:
        str: A formatted progress bar string.

    """
    filled = int((current / maximum) * length) if maximum > 0 else 0
    empty = length - filled
    bar = f"[{color}]" + "▮" * filled
    if empty > 0:
        bar += "[dim white]" + "▯" * empty + "[/]"
    bar += "[/]"
    return bar


# ---- Integer helpers ----


def sign(value: int) -> int:
    """Returns -1, 0 or 1 according to the sign of value."""
    return (value > 0) - (value < 0)


def trunc_div(numerator: float, denominator: int) -> int:
    """
    Integer division truncating toward zero.

    Python's ``//`` floors, which would turn -15 / 100 into -1 instead of 0.

    """
    return int(numerator / denominator)


def update_damage_by_buf(add_value: int, is_percent: bool, cur_value: int) -> int:
    """
    Applies a buffer onto a positive amount.

    Args:
        add_value (int):
            The buffer value, a percentage when is_percent is set.
        is_percent (bool):
            Whether add_value is a percentage of cur_value.
        cur_value (int):
            The amount to update. Amounts that are not strictly positive are
            returned unchanged.

    Returns:
        int:
            The updated amount.

    """
    output = cur_value
    if cur_value > 0:
        if is_percent:
            output += trunc_div(output * add_value, 100)
        else:
            output += add_value
    return output


def update_heal_by_multi(cur_value: int, coeff_multi: int) -> int:
    """Multiplies a heal amount by a coefficient."""
    return cur_value * coeff_multi


def build_effect_name(raw_effect: str, stats_name: str) -> str:
    """
    Builds the display name of an effect from its type and its stat.

    Returns "stat-effect" when both are set, otherwise whichever is not empty.

    """
    if raw_effect and stats_name:
        return f"{stats_name}-{raw_effect}"
    return raw_effect or stats_name
