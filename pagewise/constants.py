"""
Package-level constants for pagination behaviour.

These values describe fixed SQL conventions and safety limits and are not
meant to be overridden through the environment. For configurable values
(default page size, cache TTL, logging), see pagewise/settings.py.
"""

# ============================================================================
# Count Query Derivation
# ============================================================================

# Alias given to the derived subquery in SELECT COUNT(*) FROM (...) AS alias
COUNT_TABLE_ALIAS = "count_table"

# Dialects that reject an alias on a subquery in the FROM clause
DIALECTS_WITHOUT_SUBQUERY_ALIAS = frozenset({"oracle", "oci"})


# ============================================================================
# Pagination Safety Limits
# ============================================================================

# Absolute ceiling for per_page regardless of configuration
# For the configurable cap, see MAX_PAGE_SIZE in pagewise/settings.py
HARD_MAX_PAGE_SIZE = 10_000

# First page number; pages are 1-indexed
FIRST_PAGE = 1


# ============================================================================
# Count Cache
# ============================================================================

# Redis key prefix for cached pagination counts
COUNT_CACHE_KEY_PREFIX = "pagination:count"
