"""Capability resolution and manifest updates."""
