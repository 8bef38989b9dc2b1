"""Shared helpers: spatial math, timestamps, casting and exceptions."""
