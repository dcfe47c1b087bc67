"""
Campaign label parsing.

Labels look like "992833 - [28/09] FR [BR:SAMSUNG] [MAX:12.5]": a numeric
campaign id, a dash, then a free-text title carrying bracketed tags.
"""
import re
from typing import Optional

_LEADING_ID = re.compile(r"^(\d+)\s")
_ID_PREFIX = re.compile(r"^\d+\s-\s")


def extract_id(label: str) -> Optional[str]:
    """Leading number followed by whitespace, or None"""
    match = _LEADING_ID.match(label or "")
    if match:
        return match.group(1)
    return None


def resolve_id(label: str, fallback=None) -> Optional[str]:
    """Id from the label, falling back to an id field supplied by the caller"""
    campaign_id = extract_id(label)
    if campaign_id is not None:
        return campaign_id
    if fallback is None or fallback == "":
        return None
    return str(fallback)


def strip_id_prefix(label: str) -> str:
    """Remove a leading "<digits> - " and surrounding whitespace"""
    return _ID_PREFIX.sub("", label or "", count=1).strip()


def extract_parameter(label: str, name: str) -> Optional[str]:
    """
    Value of a "[NAME:number]" tag (integer or decimal), case-sensitive.

    Returns the number as written ("12.5"), or None when the tag is absent,
    so a tag holding zero stays distinguishable from no tag.
    """
    match = re.search(r"\[" + re.escape(name) + r":(\d+(\.\d+)?)\]", label or "")
    if match:
        return match.group(1)
    return None
