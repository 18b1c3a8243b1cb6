"""Priority, workload, calendar and ICS helpers for a personal task manager."""

__version__ = "0.1.0"
