"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MIN_PASSWORD_LENGTH = 6
DEFAULT_TOKEN_TTL_HOURS = 12
AUTO_ABSENCE_NOTE = "Falta registrada automaticamente pelo sistema"
INCOMPLETE_DURATION_LABEL = "Incompleto"
TIME_FORMAT = "%H:%M"
