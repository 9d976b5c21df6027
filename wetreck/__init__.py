"""
WeTreck booking and membership intake service.

Accepts tour, trek and bike bookings and membership registrations over
HTTP, stores them, sends confirmation emails and runs a daily scan that
notifies members whose membership has expired.
"""
