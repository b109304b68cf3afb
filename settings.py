# /settings.py
MAX_PLAYERS = 8
MAX_NAME_LENGTH = 20

# Seconds between the end-of-game celebration and the automatic reset.
RESET_DELAY_SEC = 4.0

# Only the newest games are shown; the history itself is kept in full.
HISTORY_DISPLAY_LIMIT = 5

DATE_FORMAT = "%d/%m/%Y"
