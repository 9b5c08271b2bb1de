from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.hr_assistant.hr_assistant.database.bootstrap import ensure_indexes, list_collections
from src.hr_assistant.hr_assistant.database.connection import DatabaseConnection, MongoConfig


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    mongo_config = dict(settings.MONGO_CONFIG)

    conn = DatabaseConnection(MongoConfig(uri=mongo_config["uri"], database=mongo_config["database"]))
    try:
        created = ensure_indexes(conn)
        collections = list_collections(conn)
    finally:
        conn.close()
    print(
        "OK: Ensured indexes -> "
        f"{mongo_config['uri']}/{mongo_config['database']} (indexes={created}, collections={len(collections)})"
    )


if __name__ == "__main__":
    main()
