"""
Predefined stacks and services.
"""
from .catalog import Catalog, CatalogServiceEntry, CatalogStackEntry, default_catalog

__all__ = ["default_catalog", "Catalog", "CatalogServiceEntry", "CatalogStackEntry"]
