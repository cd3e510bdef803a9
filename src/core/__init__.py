"""Core: domain models, contracts and query orchestration services."""
