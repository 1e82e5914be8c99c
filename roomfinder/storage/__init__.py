"""
Device-local key-value storage port (auth tokens).
"""
