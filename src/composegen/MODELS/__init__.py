"""
Compose document and result models.
"""
