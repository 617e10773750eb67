"""Database configuration and utilities."""

from .session import Base, build_engine, build_session_factory, engine_from_settings

__all__ = ["Base", "build_engine", "build_session_factory", "engine_from_settings"]
