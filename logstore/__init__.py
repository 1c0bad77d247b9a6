"""
logstore - archives execution log files in a remote blob store.
"""

__version__ = "0.1.0"
