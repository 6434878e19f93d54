"""
Datasets package public API.

Re-export the initial-order generator so callers can write:
    from sorttree.datasets import make_initial_order, SUPPORTED_DISTS
"""

from .generators import SUPPORTED_DISTS, make_initial_order

__all__ = ["make_initial_order", "SUPPORTED_DISTS"]
