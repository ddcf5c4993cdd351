"""Infrastructure adapters: storage, LLM, PDF and export."""
