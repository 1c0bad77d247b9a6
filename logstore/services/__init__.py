"""
Service layer for execution log storage.
"""
