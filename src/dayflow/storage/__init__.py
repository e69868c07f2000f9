"""Planner storage back-ends (JSON file, SQLite key-value)."""
