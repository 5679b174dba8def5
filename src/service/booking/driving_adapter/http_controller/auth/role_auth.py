from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError
from src.service.booking.domain.enum.user_role import UserRole
from src.service.booking.domain.value_object.principal import Principal
from src.service.booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


bearer_scheme = HTTPBearer(auto_error=False)


class RoleAuthStrategy:
    @staticmethod
    def is_admin(principal: Principal) -> bool:
        return principal.role == UserRole.ADMIN


@inject
async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> Principal:
    """Stateless: the principal is rebuilt from the JWT, no user lookup"""
    token = credentials.credentials if credentials else None
    return jwt_auth.get_principal_from_jwt(token)


async def require_admin(current_user: Principal = Depends(get_current_user)) -> Principal:
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span(
        'auth.require_admin',
        attributes={'user.id': current_user.user_id, 'user.role': current_user.role.value},
    ):
        if not RoleAuthStrategy.is_admin(current_user):
            raise ForbiddenError('Only admins can perform this action')
        return current_user
