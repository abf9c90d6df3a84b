"""Caller resolution for endpoints that act on a customer's own data."""

from fastapi import Header, HTTPException

from storefront.shared.caller import Caller
from storefront.utils.logging import bind_request_context


async def require_caller(x_customer_id: str = Header(default="")) -> Caller:
    """The authenticated customer, as asserted by the upstream auth layer."""
    customer_id = x_customer_id.strip()
    if not customer_id:
        raise HTTPException(status_code=401, detail="Authentication required")

    bind_request_context(customer_id=customer_id)
    return Caller(customer_id=customer_id)
