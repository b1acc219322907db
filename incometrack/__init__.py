"""Income Track - work-day income tracking and Romanian income tax calculations."""

__version__ = "0.1.0"
