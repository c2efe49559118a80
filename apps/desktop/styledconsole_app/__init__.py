"""Desktop application for the styled console."""
