"""Strongly typed column names for ProvinceSnapshot DataFrames.

Defines the data contract between schemas and consumers (metrics, export).
"""


class ColumnNames:
    """Column name constants matching ProvinceSnapshot field names."""

    REGION_ID = "region_id"
    INFECTION = "infection"
    OUTPOST_COUNT = "outpost_count"
    DISABLED = "disabled"
    FULLY_INFECTED = "fully_infected"
