"""Built-in tool plugins, discovered by wikipedia_mcp.plugin_loader."""
