"""
Argument validation for public operations.
"""

from typing import Any, Optional, Tuple, Type, Union

from shared.errors import ArgumentError


def require_instance(
    value: Any,
    expected: Union[Type, Tuple[Type, ...]],
    position: int,
    name: str,
    description: Optional[str] = None,
) -> None:
    """Raise ArgumentError unless ``value`` is an instance of ``expected``."""
    if isinstance(value, expected):
        return

    if description is None:
        expected_name = expected.__name__ if isinstance(expected, type) else expected[0].__name__
        description = f"a `{expected_name}` instance"

    raise ArgumentError(
        f"Argument {position} `{name}` must be {description}.",
        details={"argument": name, "position": position, "received": type(value).__name__}
    )


def require_string(value: Any, position: int, name: str) -> None:
    require_instance(value, str, position, name, "a string")


def require_callable(value: Any, position: int, name: str, optional: bool = False) -> None:
    if optional and value is None:
        return
    if not callable(value):
        raise ArgumentError(
            f"Argument {position} `{name}` must be a function.",
            details={"argument": name, "position": position, "received": type(value).__name__}
        )


def require_mapping(value: Any, position: int, name: str) -> None:
    require_instance(value, dict, position, name, "a dict")
