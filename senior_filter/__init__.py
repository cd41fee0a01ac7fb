"""Senior Filter: upload people records, filter by minimum age, export to Excel."""

__version__ = "1.0.0"
