"""Route Dependencies — per-request construction of stores, clients and gateways.

Invariants:
    - Client id comes from the X-Client-Id header; absent -> "anonymous"
    - The commerce client is process-wide (created in the lifespan)
"""

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from fundboard.config import get_settings
from fundboard.core.domain_types import DEFAULT_CLIENT_ID
from fundboard.infrastructure.commerce_client import CommerceClient
from fundboard.infrastructure.database import get_db
from fundboard.services.commerce_gateway import CommerceGateway
from fundboard.services.item_store import ItemStore


def get_client_id(
    x_client_id: str | None = Header(None, max_length=100),
) -> str:
    return (x_client_id or "").strip() or DEFAULT_CLIENT_ID


def get_item_store(
    client_id: str = Depends(get_client_id),
    db: AsyncSession = Depends(get_db),
) -> ItemStore:
    return ItemStore(db, client_id)


def get_commerce_client(request: Request) -> CommerceClient:
    return request.app.state.commerce_client


def get_commerce_gateway(
    db: AsyncSession = Depends(get_db),
    client: CommerceClient = Depends(get_commerce_client),
) -> CommerceGateway:
    return CommerceGateway(db, client, get_settings())
