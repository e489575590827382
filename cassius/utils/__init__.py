"""Utilidades del backend Cassius."""
