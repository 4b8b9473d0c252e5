"""Validation and lifecycle rules applied before the calculation core."""
