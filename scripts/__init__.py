"""Operator scripts for FieldSync."""
