"""Agent modes, tool errors and token helpers."""

from .modes import AgentMode, ModeMetadata, ModePolicy, ModeProfile, capabilities_of, metadata_of

__all__ = ["AgentMode", "ModeMetadata", "ModePolicy", "ModeProfile", "capabilities_of", "metadata_of"]
