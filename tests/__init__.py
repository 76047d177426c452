"""
Test suite for xirr-engine

Contains:
- tests/unit/          : Unit tests for individual modules
"""
