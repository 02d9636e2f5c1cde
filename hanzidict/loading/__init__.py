"""Build-time readers for dictionary sources."""
