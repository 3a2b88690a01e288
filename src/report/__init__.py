"""Processing output.

This module renders final account states and persists rejected rows.
"""
