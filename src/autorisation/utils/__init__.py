"""Shared helpers: typed errors, logging, date and phone normalization."""
