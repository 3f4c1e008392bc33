"""Shared helpers: text cleaning, validation and performance logging."""
