"""
studiobreak - break-time aware scheduling for studio shooting bookings.
"""

__version__ = "0.1.0"
