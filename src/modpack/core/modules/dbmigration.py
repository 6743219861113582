"""Database migration changelogs (Liquibase/Flyway) as a fixed singleton module."""
from __future__ import annotations

from modpack.core.config import Settings

from .models import DbMigrationModule


def discover_dbmigration_module(settings: Settings) -> DbMigrationModule:
    relative = f"{settings.backend.resources_root}/{settings.dbmigration.changelog_dir}"
    return DbMigrationModule(
        display_name="Database Migrations",
        description="Liquibase/Flyway database migration files",
        base_path=str(settings.resolve(relative)),
        patterns=tuple(f"{relative}/**/*.{ext}" for ext in settings.dbmigration.extensions),
    )


__all__ = ["discover_dbmigration_module"]
