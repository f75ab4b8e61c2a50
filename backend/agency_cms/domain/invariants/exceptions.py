class InvariantViolation(Exception):
    """Raised when home-page data breaks a domain rule."""
