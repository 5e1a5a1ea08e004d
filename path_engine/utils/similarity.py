"""
Similarity utilities: cosine similarity for semantic matching.
"""

from typing import List, Sequence

import numpy as np


def cosine_similarity(v1: Sequence[float], v2: Sequence[float]) -> float:
    """Compute cosine similarity between two vectors."""
    if v1 is None or v2 is None or len(v1) == 0 or len(v2) == 0:
        return 0.0
    v1_arr = np.asarray(v1, dtype=float)
    v2_arr = np.asarray(v2, dtype=float)
    dot_product = np.dot(v1_arr, v2_arr)
    norm_product = np.linalg.norm(v1_arr) * np.linalg.norm(v2_arr)
    return float(dot_product / norm_product) if norm_product > 0 else 0.0


def cosine_similarities(matrix: np.ndarray, query: Sequence[float]) -> List[float]:
    """
    Cosine similarity of query against every row of matrix.

    Rows (or a query) with zero norm get similarity 0.0.
    """
    if matrix.size == 0:
        return []
    q = np.asarray(query, dtype=float)
    row_norms = np.linalg.norm(matrix, axis=1)
    q_norm = np.linalg.norm(q)
    denom = row_norms * q_norm
    dots = matrix @ q
    sims = np.divide(dots, denom, out=np.zeros_like(dots), where=denom > 0)
    return [float(s) for s in sims]
