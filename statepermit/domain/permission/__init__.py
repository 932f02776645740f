"""Hierarchical state permission domain."""
