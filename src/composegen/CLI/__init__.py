"""
Command Line Interface for composegen.
"""
