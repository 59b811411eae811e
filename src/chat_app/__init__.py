"""Chat messaging and profile backend."""
