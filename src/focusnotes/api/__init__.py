"""HTTP API for focusnotes."""
