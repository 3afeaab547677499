"""Outcome types, errors, logging and settings."""
