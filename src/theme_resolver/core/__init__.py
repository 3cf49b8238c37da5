"""Core types, lookup tables and name parsing for theme resolution."""
