from typing import List, Optional, Tuple
from .classifier import LocalityIndex


def resolve_submission(city: Optional[str], index: LocalityIndex) -> Optional[List[Tuple[str, str]]]:
    """
    Hidden fields to attach when the form is submitted with ``city``.

    Returns one ``(area_type, area_name)`` pair per recorded administrative
    area, or None when ``city`` is not a candidate of the last lookup and the
    submission has to be blocked.
    """
    if not city:
        return None
    levels = index.get(city)
    if not levels:
        return None
    return list(levels.items())
