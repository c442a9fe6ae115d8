from typing import Any, List

REQUIRED_STR_FIELDS = ["title", "role"]
OPTIONAL_STR_FIELDS = [
    "director",
    "id",
    "type",
    "productionCompany",
    "location",
    "link",
]
# Optional fields that count toward completeness for every credit
EXPECTED_FIELDS = ["year", "director"]
# Counted toward completeness only when a flat credit fills them in
EXTRA_FLAT_FIELDS = ["productionCompany", "location", "link"]

OFFICIAL_CATEGORIES = [
    "Film",
    "Television",
    "TV",
    "Commercial",
    "Theatre",
    "Theater",
    "Print",
    "Fashion",
    "Training",
    "Voice",
    "Stunt",
    "Corporate",
    "MC",
    "Presenting",
    "Extras",
    "Other",
]


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def is_filled(v: Any) -> bool:
    if v is None or isinstance(v, bool):
        return False
    return str(v).strip() != ""


def is_official_category(name: Any) -> bool:
    """Partial, case-insensitive match against the official category words."""
    if not _is_non_empty_str(name):
        return False
    normalized = name.strip().lower()
    return any(official.lower() in normalized for official in OFFICIAL_CATEGORIES)


def validate_credit(data: Any) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    """
    if not isinstance(data, dict):
        return ["Credit must be a JSON object"]

    errors: List[str] = []

    for f in REQUIRED_STR_FIELDS:
        if f not in data:
            errors.append(f"Missing required field: {f}")
        elif not _is_non_empty_str(data[f]):
            errors.append(f"Field '{f}' must be a non-empty string")

    for f in OPTIONAL_STR_FIELDS:
        if data.get(f) is not None and not isinstance(data[f], str):
            errors.append(f"Field '{f}' must be a string if provided")

    year = data.get("year")
    if year is not None and (isinstance(year, bool) or not isinstance(year, (str, int))):
        errors.append("Field 'year' must be a string or integer if provided")

    return errors


def missing_required_fields(data: Any) -> List[str]:
    """Required fields that are absent or blank. Wrong types are validate_credit's concern."""
    if not isinstance(data, dict):
        return list(REQUIRED_STR_FIELDS)
    return [f for f in REQUIRED_STR_FIELDS if not is_filled(data.get(f))]
