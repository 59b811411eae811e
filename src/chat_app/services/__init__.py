"""Business services for messages and profiles."""
