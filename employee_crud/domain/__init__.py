"""Domain rules for employee records."""
