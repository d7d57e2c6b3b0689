from collections.abc import Mapping
from typing import Any


def read_field(source: Any, name: str, *aliases: str) -> Any:
    """
    Read `name` from a mapping or an object, trying `aliases` in order when the
    primary name is empty. Returns None when `source` is None or nothing matches.
    """
    if source is None:
        return None

    for key in (name, *aliases):
        if isinstance(source, Mapping):
            value = source.get(key)
        else:
            value = getattr(source, key, None)
        if value not in (None, ""):
            return value
    return None


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    return not str(value).strip()
