"""LobsterBoard - JSON API for OpenClaw dashboard widgets."""

__version__ = "0.3.0"
