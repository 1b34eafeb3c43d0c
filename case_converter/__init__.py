"""Test-case export converter (flat / grouped-steps CSV -> Testomat.io import CSV)."""

__version__ = "0.1.0"
