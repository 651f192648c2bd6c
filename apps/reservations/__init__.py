"""Reservations app package.

Owns the booking engine: rental cost calculation, the availability
check against existing reservations and the transactional command
handlers that create, cancel and re-status reservations.
"""
