"""Buyer identity as consumed by order placement.

Buyers are the project's Django auth users; registration, login and
password handling belong to the auth subsystem.
"""
