"""Application state shared by the CLI layers."""
