"""
Test suite for symterm

Contains:
- tests/unit/          : Unit and property-based tests for individual modules
"""
