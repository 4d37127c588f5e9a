"""Core configuration for the engine."""

from .config import DEFAULT_THRESHOLD, EngineConfig, default_config, real_config

__all__ = ["DEFAULT_THRESHOLD", "EngineConfig", "default_config", "real_config"]
