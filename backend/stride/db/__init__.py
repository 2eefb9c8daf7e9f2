"""
Database module for Stride

Contains seed data and database utilities.
"""
from stride.db.seed_data import seed_all, clear_all

__all__ = ["seed_all", "clear_all"]
