"""Stats API resources."""
