import re

_WHITESPACE = re.compile(r"\s+")


def normalize_city(text) -> str:
    """
    Canonical lookup key for a city name:
    - lowercase
    - every whitespace run removed ("New  Delhi " -> "newdelhi")
    - None -> ""
    """
    if text is None:
        return ""
    return _WHITESPACE.sub("", str(text).lower())
