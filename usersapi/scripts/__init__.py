"""Operator command-line scripts."""
