import re

_QUERY_KEY_RE = re.compile(r"[A-Za-z0-9]")


def is_query_keystroke(text: str, ctrl_or_alt: bool = False) -> bool:
    """True for a plain letter or digit that should be typed into the query input."""
    if ctrl_or_alt or not text:
        return False
    return bool(_QUERY_KEY_RE.fullmatch(text))
