"""dayflow: a personal planner for short-lived tasks and dated events."""

__version__ = "0.1.0"
