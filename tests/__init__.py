"""
Test suite for fxdecimal

Contains:
- tests/unit/          : Unit and property-based tests for individual modules
"""
