from .core import get_db_connection, initialize_database

__all__ = [
    'get_db_connection',
    'initialize_database',
]
