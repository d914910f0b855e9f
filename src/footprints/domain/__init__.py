"""
Domain layer: enums and data models.
"""

from .enums import TickType, TickClassification, ImbalanceType

__all__ = ["TickType", "TickClassification", "ImbalanceType"]
