"""Deep-work time-blocking planner backend."""

__version__ = "0.1.0"
