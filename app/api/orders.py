"""
Checkout API - Order submission endpoint.

Thin HTTP layer over OrderService: validates the request, opens a Unit of
Work and maps domain errors to status codes.
"""
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from app.application.order_service import OrderService
from app.db.connection import get_db_session
from app.domain.entities import (
    BasketNotFoundError,
    CatalogItemNotFoundError,
    EmptyBasketError,
    InvalidOrderError,
    NotificationError,
    Order,
    OrderPersistenceError,
)
from app.domain.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from app.domain.value_objects import Address

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================
# Pydantic Models
# ============================================

class AddressRequest(BaseModel):
    """Shipping address"""
    street: str = Field(..., min_length=1, max_length=180)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field("", max_length=60)
    country: str = Field(..., min_length=1, max_length=90)
    zip_code: str = Field(..., min_length=1, max_length=18)


class CreateOrderRequest(BaseModel):
    """Request to check out a basket"""
    basket_id: int = Field(..., gt=0, description="Basket to check out")
    shipping_address: AddressRequest


class OrderItemResponse(BaseModel):
    catalog_item_id: int
    product_name: str
    picture_uri: str
    unit_price: Decimal
    units: int


class CreateOrderResponse(BaseModel):
    """Response from checkout endpoint"""
    order_id: int
    buyer_id: str
    total: Decimal
    items: List[OrderItemResponse]


class NotificationFailureResponse(BaseModel):
    """Order saved, but one or more downstream notifications failed"""
    detail: str
    order_id: Optional[int]
    failed_channels: List[str]


# ============================================
# Dependencies
# ============================================

def get_order_service(request: Request) -> OrderService:
    """OrderService is built once at startup (see app.main lifespan)"""
    return request.app.state.order_service


async def get_uow(db: AsyncSession = Depends(get_db_session)) -> AbstractUnitOfWork:
    """Unit of Work bound to the request's database session"""
    return get_unit_of_work(db)


def _to_response(order: Order) -> CreateOrderResponse:
    return CreateOrderResponse(
        order_id=order.id,
        buyer_id=order.buyer_id,
        total=order.total(),
        items=[
            OrderItemResponse(
                catalog_item_id=item.item_ordered.catalog_item_id,
                product_name=item.item_ordered.product_name,
                picture_uri=item.item_ordered.picture_uri,
                unit_price=item.unit_price,
                units=item.units,
            )
            for item in order.order_items
        ],
    )


# ============================================
# Endpoints
# ============================================

@router.post(
    "/orders",
    response_model=CreateOrderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={502: {"model": NotificationFailureResponse}},
)
async def create_order(
    request: CreateOrderRequest,
    uow: AbstractUnitOfWork = Depends(get_uow),
    order_service: OrderService = Depends(get_order_service)
):
    """
    Check out a basket.

    - 201: order created and downstream systems notified
    - 404: basket not found
    - 400: basket is empty
    - 422: basket references catalog items that no longer exist
    - 500: order could not be saved (nothing was sent downstream)
    - 502: order saved but a downstream notification failed
    """
    address = Address(**request.shipping_address.model_dump())

    try:
        order = await order_service.create_order(
            uow,
            request.basket_id,
            address
        )

    except BasketNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    except EmptyBasketError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    except (CatalogItemNotFoundError, InvalidOrderError) as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

    except OrderPersistenceError as e:
        logger.error(f"❌ Checkout failed for basket {request.basket_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Order could not be saved"
        )

    except NotificationError as e:
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content=NotificationFailureResponse(
                detail=str(e),
                order_id=e.order_id,
                failed_channels=e.failed_channels,
            ).model_dump()
        )

    logger.info(f"✅ Checkout complete: basket {request.basket_id} -> order {order.id}")
    return _to_response(order)
