"""
Sophia Graph: knowledge-graph comparison engine.

Builds an immutable graph over people and entities (events, ideologies,
institutions, texts, concepts) and answers pairwise analytic queries:
shared neighbors, similarity, shortest connecting path, shared tags,
era overlap and community membership.
"""
