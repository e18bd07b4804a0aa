"""
Embedding length adaptation.

Every backend in the cascade produces its own native length; the chunk
store has exactly one dimension. ``resize_embedding`` maps any non-empty
vector onto that dimension deterministically.

Dependencies: None
System role: Normalizes heterogeneous embedding lengths for storage and search
"""

from collections.abc import Sequence


def resize_embedding(vector: Sequence[float], target_dim: int) -> list[float]:
    """
    Resize a vector to exactly ``target_dim`` values.

    Rules:
        - same length: unchanged
        - longer, exact multiple of target: average each consecutive group
        - longer otherwise: truncate
        - shorter: repeat cyclically, then truncate

    Args:
        vector: Non-empty source vector
        target_dim: Desired length (> 0)

    Returns:
        list[float]: Vector of length target_dim

    Raises:
        ValueError: If vector is empty or target_dim is not positive
    """
    if target_dim <= 0:
        raise ValueError(f"target_dim must be positive, got {target_dim}")
    if not vector:
        raise ValueError("Cannot resize an empty vector")

    values = [float(v) for v in vector]
    length = len(values)

    if length == target_dim:
        return values

    if length > target_dim:
        if length % target_dim == 0:
            group = length // target_dim
            return [
                sum(values[i * group:(i + 1) * group]) / group
                for i in range(target_dim)
            ]
        return values[:target_dim]

    repeats = -(-target_dim // length)
    return (values * repeats)[:target_dim]


def is_null_vector(vector: Sequence[float]) -> bool:
    """True when every component is zero (or the vector is empty)."""
    return all(v == 0 for v in vector)
