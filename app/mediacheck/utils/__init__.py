"""Utility modules for mediacheck."""
