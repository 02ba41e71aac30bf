"""
Article Index.

Chunks long-form articles, embeds the chunks with an external embedding
model, persists the vectors and answers cosine-similarity queries.
"""

__version__ = "0.1.0"
