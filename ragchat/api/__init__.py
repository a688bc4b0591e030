"""HTTP API for the conversational pipeline."""
