"""
Parsing of existing compose files into documents.
"""
