# gateway/models/view_table.py
# Table holding saved UI views as JSON documents

from sqlalchemy import JSON, Column, Table, Text
from sqlalchemy.dialects.postgresql import JSONB

from gateway.constants import UI_SCHEMA
from gateway.db.base import metadata


view_table = Table(
    'view',
    metadata,
    Column('id', Text, primary_key=True),  # 15-char alphanumeric id
    Column('view', JSON().with_variant(JSONB, 'postgresql'), nullable=False),  # full view document
    schema=UI_SCHEMA,
)

# JSON paths into the document's meta block
view_owner = view_table.c.view[("meta", "owner")].as_string()
view_time_updated = view_table.c.view[("meta", "timeUpdated")].as_float()
