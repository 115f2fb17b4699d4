"""
Knowledge graph construction and querying for Sophia Graph.

This module provides the immutable graph index, neighbor/path/similarity
queries, community detection, centrality and temporal analysis, and the
`GraphEngine` facade that aggregates them into pairwise comparisons.
"""
