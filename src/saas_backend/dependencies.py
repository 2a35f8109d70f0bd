"""Shared FastAPI dependencies.

Reusable type aliases that routers import. Defined here (not in main.py)
to avoid circular imports when routers are registered in main.
"""

from typing import Annotated

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from saas_backend.db.session import get_db

# Function scope: the session commits before the response is sent.
DB = Annotated[AsyncSession, Depends(get_db, scope="function")]

# Pagination query parameters for list endpoints
Skip = Annotated[int, Query(ge=0)]
Limit = Annotated[int, Query(ge=1, le=100)]
