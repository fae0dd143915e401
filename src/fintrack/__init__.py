"""FinTrack: bank SMS ingestion, fraud scoring and monthly ledgers."""

__version__ = "0.1.0"
