"""
HTTP API for poolstat.
"""
