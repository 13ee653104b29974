"""Lambda-style request handlers."""
