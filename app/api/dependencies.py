# ============================================================================
# FILE: app/api/dependencies.py
# Shared request dependencies
# ============================================================================
import hmac
from typing import Optional

from fastapi import Depends, Header, HTTPException, Path, status
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.config.settings import settings
from app.models.business import Business
from uuid import UUID



def vapi_secret_is_valid(x_vapi_secret: Optional[str] = Header(None)) -> bool:
    """
    Dependency that checks the voice assistant's shared secret header.

    An unset VAPI_SECRET rejects every request. The webhook answers
    invalid calls in its own envelope, so this returns a flag instead of raising.
    """
    expected = settings.VAPI_SECRET

    if not expected or not x_vapi_secret:
        return False

    return hmac.compare_digest(x_vapi_secret.encode(), expected.encode())


def get_public_business(
        business_id: UUID = Path(..., description="The business ID"),
        db: Session = Depends(get_db)
) -> Business:
    """
    Dependency resolving an active business from the path.

    Raises:
        HTTPException 404: If the business does not exist or is inactive
    """
    business = db.query(Business).filter(
        Business.id == business_id,
        Business.is_active == True
    ).first()

    if not business:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Business not found"
        )

    return business
