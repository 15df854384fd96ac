"""
Settings and logging helpers.
"""
