"""Commercial listings sync: extract, validate and snapshot an AppFolio listings site."""

__version__ = "2.0.0"
