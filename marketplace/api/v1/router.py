from fastapi import APIRouter

from marketplace.api.routers import (
    auth,
    cart,
    categories,
    locations,
    orders,
    payments,
    products,
    roles,
    shipping,
    shops,
    users,
)

api_router = APIRouter()

api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(roles.router)
api_router.include_router(locations.router)
api_router.include_router(shops.router)
api_router.include_router(categories.router)
api_router.include_router(products.router)
api_router.include_router(cart.router)
api_router.include_router(orders.router)
api_router.include_router(payments.router)
api_router.include_router(shipping.router)
