"""
Test suite for geoobject

Contains:
- tests/unit/          : Unit tests for individual modules
"""
