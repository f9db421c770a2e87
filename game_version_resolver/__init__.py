"""Resolve Minecraft version identifiers into comparable semantic versions."""

__version__ = "1.0.0"
