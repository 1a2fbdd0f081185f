"""Built-in plugins shipped with flexlayout."""
