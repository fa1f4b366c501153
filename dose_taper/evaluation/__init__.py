"""Input validation for calculator forms."""
