"""
Domain objects used as factory targets in tests.
"""
