"""
Serialization of compose documents to YAML text.
"""
