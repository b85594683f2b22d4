# gateway/db/bootstrap.py
# Idempotent schema bootstrap, run once at process startup

from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.schema import CreateSchema

from gateway.constants import MERLIN_SCHEMA, UI_SCHEMA
from gateway.db.base import metadata
from gateway.models.view_table import view_table
from gateway.utils.logger import log_info


async def bootstrap_schemas(engine: AsyncEngine) -> None:
    """Create the ui/merlin schemas and the ui.view table if absent.

    Safe to run repeatedly. SQLite has no schemas, so only the table is created there.
    """
    async with engine.begin() as conn:
        if conn.dialect.name == "postgresql":
            for schema in (MERLIN_SCHEMA, UI_SCHEMA):
                await conn.execute(CreateSchema(schema, if_not_exists=True))
        await conn.run_sync(metadata.create_all, tables=[view_table], checkfirst=True)
    log_info(f"Schema bootstrap complete ({engine.dialect.name})")
