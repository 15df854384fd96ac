"""
Terminal rendering of results and errors.
"""
