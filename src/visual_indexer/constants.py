"""
Constants used internally by the Visual Indexer.

These are implementation-level values that should not be overridden
via config files or CLI arguments.
"""

# Internal color constants
COLOR_MODE_RGB = "RGB"
COLOR_BLACK = (0, 0, 0)
COLOR_WHITE = (255, 255, 255)

# Spreadsheet-style column naming
COLUMN_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
COLUMN_BASE = len(COLUMN_ALPHABET)

# PDF user space is 72 points per inch
PDF_POINTS_PER_INCH = 72

# Fonts tried for grid labels before falling back to Pillow's default
LABEL_FONT_REGULAR = "DejaVuSans.ttf"
LABEL_FONT_BOLD = "DejaVuSans-Bold.ttf"

# Output naming
INDEX_IMAGE_SUFFIX = ".png"
INDEX_MANIFEST_SUFFIX = ".json"
