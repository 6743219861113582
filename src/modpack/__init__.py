"""
modpack - monorepo module packer

Discovers backend bounded contexts, frontend feature folders, infrastructure
services and database migrations in a monorepo, and packs each one into a
single artifact through the external repomix packer.
"""

__version__ = "2.0.0"
__all__ = ["__version__"]
