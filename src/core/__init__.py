"""
Core value types, buffers, configuration, and contracts.

This module contains the foundational building blocks of branded indexing:
tokens, proofs, proven indices and ranges, and the buffer capabilities
they are checked against.
"""
