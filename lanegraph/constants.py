"""
Centralized constants for lanegraph.

Defaults used when no settings file overrides them.
"""

# Settings file location, relative to the user's home directory
SETTINGS_DIR = ".config/lanegraph"
SETTINGS_FILE = "settings.json"

# Lane colors, cycled by lane index
DEFAULT_LANE_COLORS = [
    "#4CAF50",  # Green
    "#2196F3",  # Blue
    "#FF9800",  # Orange
    "#9C27B0",  # Purple
    "#F44336",  # Red
    "#00BCD4",  # Cyan
    "#E91E63",  # Pink
    "#795548",  # Brown
]

# Scene geometry in pixels
DEFAULT_COLUMN_WIDTH = 260
DEFAULT_ROW_HEIGHT = 130
DEFAULT_PADDING = 50
