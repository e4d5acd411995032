"""Color palette constants for dark theme."""

# Base theme colors
BACKGROUND = "#0F172A"
PANEL_BG = "#1E293B"
SURFACE = "#334155"
BORDER = "#475569"

# Accent colors
ACCENT = "#22C55E"
ACCENT_HOVER = "#4ADE80"

# Semantic colors
WARNING = "#F59E0B"
ERROR = "#EF4444"
SUCCESS = "#10B981"
INFO = "#60A5FA"

# Text colors
TEXT_PRIMARY = "#F8FAFC"
TEXT_SECONDARY = "#B0BEC5"
TEXT_DISABLED = "#64748B"

# Completion bars
COMPLETED_COLOR = "#22C55E"
MISSING_COLOR = "#F59E0B"
