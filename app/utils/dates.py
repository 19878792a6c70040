"""
Date helpers
"""
from datetime import date


def today() -> date:
    """Current calendar day; every measurement is bucketed by it."""
    return date.today()
