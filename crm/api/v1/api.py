from fastapi import APIRouter
from crm.api.v1.routers import health, customers, addresses

# This is the main router for the v1 API
api_router = APIRouter()

api_router.include_router(health.router, tags=["Health"])

# All routes from customers.py will be prefixed with '/customers'
api_router.include_router(customers.router, prefix="/customers", tags=["Customers"])

# Address routes live both under /customers/{id}/addresses and /addresses
api_router.include_router(addresses.router, tags=["Addresses"])
