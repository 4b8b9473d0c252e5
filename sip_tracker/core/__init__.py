"""Pure, date-driven calculation core."""
