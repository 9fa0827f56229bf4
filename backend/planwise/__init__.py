"""Planwise subscription billing backend."""
