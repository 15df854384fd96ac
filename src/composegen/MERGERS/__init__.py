"""
Merging catalog services into new or existing compose files.
"""
