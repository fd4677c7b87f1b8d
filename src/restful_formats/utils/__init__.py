"""Utilities for restful-formats."""
