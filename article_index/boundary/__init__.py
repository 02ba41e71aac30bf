"""
Boundary layer.

Adapters for the external collaborators: the embedding model provider
and the document collection store.
"""
