from enum import Enum

import attrs


class UserRole(str, Enum):
    USER = 'user'
    ADMIN = 'admin'


@attrs.define
class UserEntity:
    """Caller identity as issued by the identity provider; trusted as-is"""

    id: int
    role: UserRole = UserRole.USER
    email: str = ''
    name: str = ''

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

