"""
CSV persistence for the housing system.

- validation: field parsers/formatters (NRIC, dates, enums)
- DataLoader: data directory -> HousingSystem
- DataWriter: HousingSystem -> data directory
"""

from .loader import DataLoader
from .writer import DataWriter

__all__ = ["DataLoader", "DataWriter"]
