"""Constants and configuration for the letterhead layout engine."""

class LayoutConstants:
    """Central configuration constants for pagination and printing."""
    
    # Document layout
    CHARS_PER_LINE = 75  # Average characters per visual line at A4 body width
    MAX_LINES_PER_PAGE = 27  # Visual lines per page after header/footer
    WORD_BREAK_THRESHOLD = 0.7  # Earliest acceptable space, as a fraction of the cut budget
    
    # Plain-text sheets
    SHEET_WIDTH = 85  # Characters per text sheet line
    
    # Printing defaults
    DEFAULT_DUPLEX_MODE = False
    
    # Brand colour used for the letterhead name, headings and footer rule
    BRAND_COLOR = "#D4503A"
