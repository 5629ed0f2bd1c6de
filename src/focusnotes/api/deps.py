"""Request dependencies."""

import logging
from typing import Annotated, Any

from fastapi import Body, Depends, HTTPException, Request, status

from focusnotes.core.storage import Storage
from focusnotes.core.validation import Invalid, ValidationResult

logger = logging.getLogger(__name__)


def get_storage(request: Request) -> Storage:
    """Return the store the application was built with."""
    return request.app.state.storage


StorageDep = Annotated[Storage, Depends(get_storage)]

# Raw decoded JSON; validation happens in the endpoint.
JsonBody = Annotated[Any, Body()]


def require_valid[T](result: ValidationResult[T], message: str) -> T:
    """Return the validated value or raise 400 with ``message``."""
    if isinstance(result, Invalid):
        logger.info("%s: %s", message, result.describe())
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)
    return result.value
