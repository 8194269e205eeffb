"""Shared helpers used across MergeStats packages."""
