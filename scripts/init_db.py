from __future__ import annotations

import importlib

from dotenv import load_dotenv

from hr_backoffice.config import get_settings_module
from hr_backoffice.database.bootstrap import apply_schema, ensure_admin_account, list_tables
from hr_backoffice.database.connection import DatabaseConnection, DBConfig


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    config = DBConfig.from_mapping(settings.DB_CONFIG)
    conn = DatabaseConnection.get_instance(config)

    apply_schema(conn)
    admin_email = getattr(settings, "ADMIN_EMAIL", "")
    admin_password = getattr(settings, "ADMIN_PASSWORD", "")
    if admin_email and admin_password:
        ensure_admin_account(conn, email=admin_email, password=admin_password)

    tables = list_tables(conn)
    print(f"OK: Applied schema.sql -> {config.user}@{config.host}:{config.port}/{config.database} (tables={len(tables)})")


if __name__ == "__main__":
    main()
