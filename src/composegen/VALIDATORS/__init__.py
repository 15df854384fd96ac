"""
Structural checks on raw compose file text.
"""
