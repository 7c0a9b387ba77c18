# app/services/database_service.py
"""
Catalogue database service
Read-only access to the tour catalogue over an async SQLAlchemy pool
"""

import re
from typing import Any, Dict, List, Optional, Union

from sqlalchemy import text
from sqlalchemy.sql import Select
from sqlalchemy.sql.elements import TextClause

from app.models.base import create_catalog_engine, create_session_factory
from app.utils.exceptions import ReadOnlyQueryError
from app.utils.logger import logger

# SELECT forms that write or take row locks
WRITING_SELECT = re.compile(
    r"\b(into|for\s+(update|share|no\s+key\s+update|key\s+share))\b",
    re.IGNORECASE,
)
_QUOTED_LITERAL = re.compile(r"'(?:[^']|'')*'")


class DatabaseService:
    def __init__(self, engine=None):
        self.engine = engine or create_catalog_engine()
        self.async_session = create_session_factory(self.engine)
        logger.info(" DatabaseService initialised")

    @staticmethod
    def ensure_read_only(statement: Union[str, Select]):
        """Reject anything that is not a plain SELECT before it reaches the pool"""
        if isinstance(statement, Select):
            if WRITING_SELECT.search(str(statement)):
                raise ReadOnlyQueryError("SELECT ... FOR UPDATE/SHARE is not allowed on the catalogue database.")
            return statement
        if isinstance(statement, TextClause):
            statement = statement.text
        if not isinstance(statement, str):
            raise ReadOnlyQueryError(f"Unsupported statement type: {type(statement).__name__}")

        sql = _QUOTED_LITERAL.sub("''", statement).strip().rstrip(";")
        if not sql.lower().startswith("select"):
            raise ReadOnlyQueryError("Only SELECT queries are allowed on the catalogue database.")
        if ";" in sql:
            raise ReadOnlyQueryError("Multiple statements are not allowed on the catalogue database.")
        if WRITING_SELECT.search(sql):
            raise ReadOnlyQueryError("SELECT ... INTO and locking SELECTs are not allowed on the catalogue database.")
        return text(statement)

    async def run_read_only_query(
        self,
        statement: Union[str, Select],
        params: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        statement = self.ensure_read_only(statement)
        async with self.async_session() as session:
            if self.engine.dialect.name == "postgresql":
                await session.execute(text("SET TRANSACTION READ ONLY"))
            result = await session.execute(statement, params or {})
            return [dict(row) for row in result.mappings().all()]

    async def close(self):
        await self.engine.dispose()
        logger.info("🔌 catalogue connection pool closed")

# global instance
database_service = DatabaseService()
