import attrs

from src.service.booking.domain.enum.user_role import UserRole


@attrs.define(frozen=True)
class Principal:
    """Authenticated caller as vouched for by the auth collaborator"""

    user_id: int
    role: UserRole = attrs.field(converter=UserRole)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def can_access(self, *, owner_id: int) -> bool:
        return self.is_admin or self.user_id == owner_id
