"""Billing rules: proration and activation periods."""
