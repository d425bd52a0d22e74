"""
Core domain models, mathematical primitives, and contracts.

This module contains the numeric value model, the term tree and the JSON
contracts for serialized terms.
"""
