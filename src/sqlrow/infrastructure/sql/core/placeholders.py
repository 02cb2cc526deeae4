"""
Positional parameter markers.

A placeholder factory returns a fresh marker function for one statement. The
function is called once per positional argument, in emission order.
"""

import itertools
from typing import Callable

PlaceholderFunc = Callable[[], str]
PlaceholderFactory = Callable[[], PlaceholderFunc]


def default_placeholder() -> PlaceholderFunc:
    """Marker function for qmark drivers: always ``?``."""
    return lambda: "?"


def numbered_placeholder() -> PlaceholderFunc:
    """Marker function producing ``$1``, ``$2``, ... for one statement.

    Examples:
        >>> ph = numbered_placeholder()
        >>> ph(), ph(), ph()
        ('$1', '$2', '$3')
    """
    counter = itertools.count(1)
    return lambda: f"${next(counter)}"
