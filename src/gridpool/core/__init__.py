"""
Core domain models, grid math primitives, and boundary contracts.

This module contains the foundational building blocks of the round engine
that are independent of any presentation layer.
"""
