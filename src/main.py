"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api import auth, deleted_users, users
from src.config import get_settings
from src.exceptions import UserAdminError, user_admin_error_handler
from src.logging_config import configure_logging

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    configure_logging(settings)
    yield


app = FastAPI(
    title="User Admin API",
    description="Administration of user accounts, roles and the trash",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.add_exception_handler(UserAdminError, user_admin_error_handler)

# Register routers; deleted_users before users so /users/deleted is not read as a user id
app.include_router(auth.router)
app.include_router(deleted_users.router)
app.include_router(users.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
