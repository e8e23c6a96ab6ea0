"""
Sorted container implementations for the person database.
"""

from persondb.models.sortedcontainers.avl_tree import AVLTree

__all__ = ["AVLTree"]
