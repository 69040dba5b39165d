"""Forge REST API access."""

from pullr.orchestrator.forge.client import ApiResponse, ForgeClient

__all__ = ["ApiResponse", "ForgeClient"]
