"""
Configuration for the log storage plugin.
"""
