"""Branches app package.

A branch is a physical rental location. Every vehicle in the fleet
belongs to exactly one branch; branches cannot be removed while they
still hold vehicles.
"""
