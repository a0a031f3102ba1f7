"""Core error annotation modules."""
