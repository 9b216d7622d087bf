"""
Domain value types.

Contains the scope Token, proof markers, the IndexingError taxonomy
and the proven Index / Range values with their algebra.
"""

from src.core.domain.errors import (
    BrandViolation,
    IndexingError,
    IndexingErrorKind,
    ScopeClosedError,
)
from src.core.domain.index import Index, mint_index
from src.core.domain.proof import (
    NonEmpty,
    Proof,
    ProofType,
    Provable,
    Unknown,
    is_nonempty,
    proof_add,
)
from src.core.domain.range import Range, mint_range
from src.core.domain.token import Token, ensure_open, ensure_same_brand, issue_token

__all__ = [
    # Errors
    "IndexingError",
    "IndexingErrorKind",
    "BrandViolation",
    "ScopeClosedError",
    # Token
    "Token",
    "issue_token",
    "ensure_open",
    "ensure_same_brand",
    # Proofs
    "Proof",
    "ProofType",
    "NonEmpty",
    "Unknown",
    "Provable",
    "proof_add",
    "is_nonempty",
    # Values
    "Index",
    "Range",
    "mint_index",
    "mint_range",
]
