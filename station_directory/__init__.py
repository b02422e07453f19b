"""
Station Directory - user directory with direct messaging.

Users, sessions and messages stored in one of two interchangeable
backends (whole-file JSON or Redis).
"""

__version__ = "1.0.0"
