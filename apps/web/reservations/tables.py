"""Table options offered on the booking form and in the dashboard."""

AUTO_ASSIGN = "Auto Assign"

TABLE_AREAS = [
    ("Indoor", 20),
    ("Outdoor", 15),
    ("VIP", 10),
    ("Terrace", 5),
]

TABLE_OPTIONS = [
    f"{area}-{number:02d}" for area, count in TABLE_AREAS for number in range(1, count + 1)
]

PUBLIC_TABLE_OPTIONS = [AUTO_ASSIGN, *TABLE_OPTIONS]


def normalize_table(value: str | None) -> str:
    """'Auto Assign' and blanks mean no table is chosen yet."""
    value = (value or "").strip()
    if not value or value == AUTO_ASSIGN:
        return ""
    return value
