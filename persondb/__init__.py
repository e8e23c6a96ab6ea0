"""
AVL-tree based person database.

This package provides an in-memory, file-backed store of person records with:
- Find(first, last) - O(log N) exact lookup
- FindByLastName(last) - Pruned scan using the key ordering
- FindByFirstName(first) - Full ordered scan
- Update / Delete - In-place field updates and rebalancing deletes
- Save / Load - Whole-file rewrite in key order
"""

from persondb.engine.database import PersonDatabase

__all__ = ["PersonDatabase"]
