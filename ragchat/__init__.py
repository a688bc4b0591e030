"""ragchat: retrieval-augmented conversational pipeline."""

__version__ = "0.1.0"
