# Define a static color class for consistent use across the app


class Colors:
    # Semantic: Gain (Emerald instead of "Grass Green")
    green = "#059669"  # Emerald 600
    light_green = "#6ee7b7"  # Emerald 300

    # Semantic: Loss (Rose instead of "Warning Sign Red")
    pink = "#e11d48"  # Rose 600
    light_pink = "#fda4af"  # Rose 300

    # Neutral
    gray = "#4b5563"  # Cool Gray, reference line
    light_gray = "#9ca3af"
    dark_charcoal = "#1f2937"  # Tooltip text
    white = "#ffffff"


GRID_COLOR = "rgba(75, 85, 99, 0.1)"  # gray at 10% opacity


def direction_color(direction: str | None) -> str:
    """Line color for a price direction; only gains are green."""
    return Colors.green if direction == "up" else Colors.pink
