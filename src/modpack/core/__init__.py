"""Core library for modpack: configuration, module discovery and packing."""
