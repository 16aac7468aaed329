"""Dining philosophers simulation, run with threads and locks or with processes and semaphores."""

__version__ = "1.0.0"