"""
Numerical tolerances for puzzle geometry.

Every geometry function accepts a ``tolerance`` keyword; these are the
defaults it falls back to.
"""

# Side-of-plane and equality tests
EPS = 1e-9

# Vertices closer than this are merged after triple-plane enumeration
DEDUP_TOL = 1e-8

# Upper bound on the size of a group built by close_group()
MAX_GROUP_SIZE = 1000
