"""Transaction ingestion.

This module reads raw CSV sources and turns rows into transactions.
It drives the single-pass processing pipeline.
"""
