"""
JWT bearer token handling

Tokens are issued by the identity provider; this service only verifies
the signature and rebuilds the caller identity from the claims.
"""

from typing import Dict, Optional

import jwt

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import AuthenticationError
from src.service.ordering.domain.entity.user_entity import UserEntity, UserRole


class JwtAuth:
    def __init__(self) -> None:
        self.secret = settings.SECRET_KEY.get_secret_value()
        self.algorithm = settings.ALGORITHM

    def decode_jwt_token(self, token: str) -> Dict:
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.PyJWTError:
            raise AuthenticationError('Invalid token') from None

    def get_current_user_info_from_jwt(self, token: Optional[str]) -> UserEntity:
        if not token:
            raise AuthenticationError('Not authenticated')

        payload = self.decode_jwt_token(token)

        user_id = payload.get('user_id')
        role = payload.get('role')
        if not user_id or role not in {r.value for r in UserRole}:
            raise AuthenticationError('Invalid token')

        # Rebuild UserEntity from JWT payload (no DB query)
        return UserEntity(
            id=int(user_id),
            role=UserRole(role),
            email=payload.get('email') or '',
            name=payload.get('name') or '',
        )
