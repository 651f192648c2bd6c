"""Vehicles app package: the rentable fleet."""
