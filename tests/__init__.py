"""
Test suite for gridpool

Contains:
- tests/unit/          : Unit tests for individual modules
"""
