"""Coefficient design, response and export modules."""
