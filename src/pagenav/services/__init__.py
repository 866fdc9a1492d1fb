"""Page navigation services."""
