from crud_backend.database.connection import Database, DatabaseNotConnectedError

__all__ = ["Database", "DatabaseNotConnectedError"]
