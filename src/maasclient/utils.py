# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Remote API library."""

__all__ = ["flatten", "urlencode"]

from collections.abc import Sequence
from urllib.parse import quote_plus


def _as_text(name, value):
    if isinstance(value, (bytes, str)):
        return value
    elif isinstance(value, bool):
        return "true" if value else "false"
    elif isinstance(value, (int, float)):
        return str(value)
    raise ValueError(
        f"Query parameter {name!r} is neither text, a number, a boolean, "
        "nor a sequence of those."
    )


def flatten(params):
    """Flatten dictionary values if they are not an instance of
    (bytes, unicode) and they are an iterable.

    Numbers are represented as text, booleans as "true" or "false".
    """
    for name, value in params.items():
        if isinstance(value, Sequence) and not isinstance(value, (bytes, str)):
            for iterable_item in value:
                yield name, _as_text(name, iterable_item)
        else:
            yield name, _as_text(name, value)


def urlencode(data):
    """A version of `urllib.urlencode` that isn't insane.

    This only cares that `data` is an iterable of iterables. Each sub-iterable
    must be of overall length 2, i.e. a name/value pair.

    Unicode strings will be encoded to UTF-8.
    """
    return "&".join(
        f"{quote_plus(name)}={quote_plus(value)}" for name, value in data
    )
