"""
Boundary adapters.

Concrete implementations of the pipeline collaborators: Gemini generator
and embedder, document loaders, tools and SQL-backed conversation memory.
"""
