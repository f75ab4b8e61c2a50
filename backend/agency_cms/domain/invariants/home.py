from .exceptions import InvariantViolation

STAT_ICONS = {
    "Award", "Users", "Sparkles", "Briefcase", "Camera", "Coffee",
    "Feather", "Globe", "Heart", "Lightbulb", "MapPin", "MessageSquare",
    "Monitor", "Palette", "PieChart", "Rocket", "Settings", "Shield",
    "Star", "Target", "TrendingUp", "Zap",
}

def assert_stat_icon(icon):
    # Empty means "no icon selected"
    if icon and icon not in STAT_ICONS:
        raise InvariantViolation(f"Unknown stat icon: {icon!r}")

def assert_image_resolved(image_url):
    if image_url is not None and not isinstance(image_url, str):
        raise InvariantViolation(
            "Pending image files must be uploaded before they are persisted."
        )

def assert_display_order(rows):
    orders = [row["display_order"] for row in rows]
    expected = list(range(1, len(orders) + 1))

    if orders != expected:
        raise InvariantViolation(
            f"Display orders are not consecutive starting from 1: {orders}"
        )
