# Authentication module

from stride.modules.auth.dependencies import (
    get_current_claims,
    get_optional_claims,
    get_current_email,
    require_admin,
)

__all__ = [
    "get_current_claims",
    "get_optional_claims",
    "get_current_email",
    "require_admin",
]
