"""Merito: academic merit coin platform."""
