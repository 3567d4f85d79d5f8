from functools import lru_cache
from supabase import create_client, Client
from quizmaster.config import settings
import logging

logger = logging.getLogger(__name__)

# Supabase Client Setup
@lru_cache(maxsize=1)
def get_supabase_client() -> Client:
    """Get Supabase client for authentication operations"""
    return create_client(
        settings.supabase_url,
        settings.supabase_anon_key.get_secret_value()
    )

@lru_cache(maxsize=1)
def get_supabase_admin_client() -> Client:
    """Get Supabase admin client for table operations"""
    return create_client(
        settings.supabase_url,
        settings.supabase_service_role_key.get_secret_value()
    )

# Database operations using Supabase REST API
class Database:
    """Table operations using the Supabase REST API"""

    def __init__(self, client: Client = None):
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = get_supabase_admin_client()
        return self._client

    def insert(self, table: str, data: dict):
        """Insert data into table"""
        try:
            result = self.client.table(table).insert(data).execute()
            return result.data[0] if result.data else None
        except Exception as e:
            logger.error(f"Insert error in {table}: {e}")
            raise

    def select(self, table: str, columns: str = "*", filters: dict = None, order_by: str = None, descending: bool = False):
        """Select data from table"""
        try:
            query = self.client.table(table).select(columns)

            if filters:
                for key, value in filters.items():
                    query = query.eq(key, value)

            if order_by:
                query = query.order(order_by, desc=descending)

            result = query.execute()
            return result.data
        except Exception as e:
            logger.error(f"Select error in {table}: {e}")
            raise

    def update(self, table: str, data: dict, filters: dict):
        """Update data in table"""
        try:
            query = self.client.table(table).update(data)

            for key, value in filters.items():
                query = query.eq(key, value)

            result = query.execute()
            return result.data[0] if result.data else None
        except Exception as e:
            logger.error(f"Update error in {table}: {e}")
            raise

    def delete(self, table: str, filters: dict):
        """Delete data from table"""
        try:
            query = self.client.table(table).delete()

            for key, value in filters.items():
                query = query.eq(key, value)

            result = query.execute()
            return result.data
        except Exception as e:
            logger.error(f"Delete error in {table}: {e}")
            raise
