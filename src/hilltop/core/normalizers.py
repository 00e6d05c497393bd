"""
Input normalization that runs before typed validation.

The admin form posts tags as a single comma separated string and leaves
optional inputs as empty strings. These helpers turn such values into the
shapes the pydantic models declare, so the models themselves stay strict.
"""

from typing import Any


def split_tags(value: Any) -> Any:
    """
    Coerce tag input into a list of trimmed strings.

    ``"docker, kubernetes"`` becomes ``["docker", "kubernetes"]``; empty
    entries produced by stray commas are dropped. ``None`` becomes ``[]``.
    Lists have their string entries trimmed but keep empty entries so the
    model can reject them. Anything else is returned untouched for the model
    to reject.
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [tag.strip() for tag in value.split(",") if tag.strip()]
    if isinstance(value, (list, tuple)):
        return [tag.strip() if isinstance(tag, str) else tag for tag in value]
    return value


def blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value
