from fastapi import APIRouter, Depends

from app.api.deps import require_ready
from app.api.v1.routes import auth, goals, investments, notification, reports, transactions, users
from app.core.auth import auth_backend, fastapi_users, UserCreate, UserRead

api_router = APIRouter(dependencies=[Depends(require_ready)])

# Custom logout goes before the fastapi-users auth router so it handles /jwt/logout
api_router.include_router(auth.router, prefix="/auth")
api_router.include_router(
    fastapi_users.get_auth_router(auth_backend),
    prefix="/auth/jwt",
    tags=["Authentication"],
)
api_router.include_router(
    fastapi_users.get_register_router(UserRead, UserCreate),
    prefix="/auth",
    tags=["Authentication"],
)

api_router.include_router(users.router)
api_router.include_router(transactions.router)
api_router.include_router(goals.router)
api_router.include_router(investments.router)
api_router.include_router(reports.router)
api_router.include_router(notification.router)
