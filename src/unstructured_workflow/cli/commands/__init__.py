"""CLI sub-commands, one module per API collection."""
