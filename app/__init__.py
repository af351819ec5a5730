"""
Vacation Planner API.

Holiday calendars, vacation-day accounting and color assignment for a
multi-location vacation planner.
"""

__version__ = "1.0.0"
