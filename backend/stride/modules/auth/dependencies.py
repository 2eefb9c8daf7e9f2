from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Any, Dict, Optional

from stride.core.logging_config import logger, set_user_email
from stride.core.security import decode_token, is_admin_email

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


def _claims_from_credentials(credentials: HTTPAuthorizationCredentials) -> Dict[str, Any]:
    payload = decode_token(credentials.credentials)

    if payload.get("type") != "access":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type"
        )

    email = payload.get("email") or payload.get("sub")
    if not email:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload"
        )

    payload["email"] = email.lower().strip()
    set_user_email(payload["email"])
    return payload


async def get_current_claims(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> Dict[str, Any]:
    """Get the verified claims of the bearer token"""
    return _claims_from_credentials(credentials)


async def get_optional_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security)
) -> Optional[Dict[str, Any]]:
    """Claims when a bearer token is present, None for anonymous requests"""
    if credentials is None:
        return None
    return _claims_from_credentials(credentials)


async def get_current_email(
    claims: Dict[str, Any] = Depends(get_current_claims)
) -> str:
    """Get the email of the authenticated user"""
    return claims["email"]


async def require_admin(
    email: str = Depends(get_current_email)
) -> str:
    """Allow only the configured admin account"""
    if not is_admin_email(email):
        logger.log_auth_event("admin_access", success=False, user_email=email, reason="not admin")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )
    return email
