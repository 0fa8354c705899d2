"""
Core application constants.

These values centralize common constants such as:
- Common HTTP header names.
- Reservation timeline window sizes and labels.
"""

# Common HTTP header names
HEADER_REQUEST_ID: str = "X-Request-ID"

# Selectable timeline window sizes (days)
ALLOWED_WINDOW_SIZES: frozenset = frozenset({7, 14, 21, 30})
DEFAULT_WINDOW_SIZE: int = 14

# Timeline labels
UNASSIGNED_GROUP: str = "Unassigned"
NO_FLOOR_GROUP: str = "Other"
UNKNOWN_GUEST_LABEL: str = "Unknown Guest"
EMPTY_TIMELINE_MESSAGE: str = (
    "No rooms configured. Add rooms in the Rooms section to see them here."
)
