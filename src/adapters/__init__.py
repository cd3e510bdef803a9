"""Adapters: HTTP access to the character API and exporters."""
