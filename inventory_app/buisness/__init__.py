"""
Domain layer for the inventory system.
Contains business rules, managers, factories and state machines
separated from data persistence concerns.
"""
