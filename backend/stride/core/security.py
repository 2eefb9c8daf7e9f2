from datetime import datetime, timedelta
from typing import Optional, Dict, Any
from jose import JWTError, jwt
from fastapi import HTTPException, status

from stride.core.config import settings


def create_access_token(email: str, expires_delta: Optional[timedelta] = None,
                        extra_claims: Optional[Dict[str, Any]] = None) -> str:
    """Create JWT access token for an email identity"""
    to_encode: Dict[str, Any] = dict(extra_claims or {})

    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({
        "sub": email,
        "email": email.lower().strip(),
        "exp": expire,
        "type": "access",
    })
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> Dict[str, Any]:
    """Decode JWT token"""
    try:
        return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )


def is_admin_email(email: Optional[str]) -> bool:
    """Check an email against the configured admin account"""
    if not email:
        return False
    return email.lower().strip() == settings.ADMIN_EMAIL.lower().strip()
