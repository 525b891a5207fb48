"""Core enrichment building blocks: key notation, genre cache, batched lookups."""
