from warehouse.database.base import Base
from warehouse.database.engine import build_engine, create_schema, engine, import_all_models
from warehouse.database.session import SessionLocal

__all__ = [
    "Base",
    "SessionLocal",
    "build_engine",
    "create_schema",
    "engine",
    "import_all_models",
]
