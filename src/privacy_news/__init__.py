"""Generated data-privacy news for the CalInformed site, live and pre-rendered."""

__all__ = ["catalog", "config", "models", "prompts", "publish", "render", "schema", "session", "workflow"]
