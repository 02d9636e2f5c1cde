"""Persistence layer for the compiled dictionary."""
