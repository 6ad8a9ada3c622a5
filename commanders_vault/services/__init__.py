from commanders_vault.services.workspaces import WorkspaceRegistry, get_registry

__all__ = ["WorkspaceRegistry", "get_registry"]
