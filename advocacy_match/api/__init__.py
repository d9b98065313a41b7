"""
HTTP API for the advocacy matching platform.
"""
