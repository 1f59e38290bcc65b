"""Shared helpers for cachefetch."""
