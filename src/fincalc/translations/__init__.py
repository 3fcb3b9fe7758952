"""Packaged JSON translation catalogues."""
