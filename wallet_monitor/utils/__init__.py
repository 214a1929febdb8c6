"""Utility helpers for the wallet monitor."""
