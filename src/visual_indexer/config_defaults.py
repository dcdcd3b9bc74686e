"""Shared default values for user-facing configuration settings."""

# Canvas
DEFAULT_MAX_CANVAS_WIDTH = 1792
DEFAULT_MAX_CANVAS_HEIGHT = 1024
DEFAULT_ROW_GUTTER_WIDTH = 50
DEFAULT_COLUMN_GUTTER_HEIGHT = 50

# Style
DEFAULT_BACKGROUND = "#ffffff"
DEFAULT_LINE_COLOR = "#000000"
DEFAULT_LINE_WIDTH = 2
DEFAULT_LABEL_COLOR = "#000000"
DEFAULT_LABEL_PX = 20
DEFAULT_LABEL_BOLD = True

# Rendering
DEFAULT_DPI = 100
DEFAULT_PAGES_PER_GRID = 20
DEFAULT_START_PAGE = 1

# Output
DEFAULT_OUTPUT_DIR = "out"
