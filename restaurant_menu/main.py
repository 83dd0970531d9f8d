"""
FastAPI Application Entry Point

Restaurant Menu - public menu API plus admin content management.

Endpoints:
    - GET  /api/menu: Visible categories with their items
    - GET  /api/settings: Restaurant settings
    - POST /api/admin/login: Admin login (signed bearer token)
    - /api/admin/categories, /api/admin/items: Admin CRUD
    - GET/PUT /api/admin/settings: Admin settings management
    - GET  /health: System health check

Author: Khalil Bannouri
Version: 1.0.0
"""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from restaurant_menu.core.config import Settings, get_settings, setup_logging
from restaurant_menu.core.errors import (
    AppError,
    AuthenticationError,
    NotFoundError,
    ValidationFailedError,
    classify_database_error,
    to_error_response,
)
from restaurant_menu.core.security import (
    AdminIdentity,
    create_admin_token,
    require_admin,
    verify_password,
)
from restaurant_menu.database import Database, get_db
from restaurant_menu.models import Admin, Category, MenuItem
from restaurant_menu.schemas import (
    AdminUser,
    CategoryCreate,
    CategoryUpdate,
    CategoryWithItemsResponse,
    ErrorResponse,
    HealthResponse,
    LoginRequest,
    LoginResponse,
    MenuItemCreate,
    MenuItemResponse,
    MenuItemWithCategoryResponse,
    MessageResponse,
    SettingsResponse,
    SettingsUpdate,
)
from restaurant_menu.services.cache import DataCache
from restaurant_menu.services.repository import (
    CacheKind,
    MenuRepository,
    delete_category_cascade,
    get_category,
    get_or_create_settings,
    list_categories,
    next_category_order,
)
from restaurant_menu.services.seed import ensure_default_data

logger = logging.getLogger(__name__)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}

# Columns a partial category update may not set to null
NON_NULLABLE_CATEGORY_FIELDS = {"name", "order", "visible"}


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown events.
    """
    settings: Settings = app.state.settings
    database: Database = app.state.database

    # Startup
    logger.info("=" * 60)
    logger.info(f"🚀 Starting {settings.app_name}")
    logger.info(f"   Version: {settings.app_version}")
    logger.info(f"   Environment: {settings.env_mode.value}")
    logger.info(f"   Debug: {settings.debug}")
    logger.info("=" * 60)

    await database.connect()
    logger.info("✅ Database initialized")

    if settings.seed_on_startup:
        async with database.session() as session:
            result = await ensure_default_data(session)
        if not result.success:
            logger.warning(f"⚠️ Default data could not be seeded: {result.error_message}")
        elif result.seeded:
            logger.info("✅ Default data seeded")

    missing = settings.validate_production_config()
    if missing:
        logger.warning(f"⚠️ Missing production config: {missing}")

    logger.info("=" * 60)
    logger.info("✅ Application ready!")
    logger.info("=" * 60)

    yield  # Application runs

    # Shutdown
    logger.info("Shutting down...")
    app.state.cache.clear()
    await database.disconnect()
    logger.info("✅ Cleanup complete")


# =============================================================================
# DEPENDENCIES
# =============================================================================

def get_repository(request: Request) -> MenuRepository:
    return request.app.state.repository


async def _commit(db: AsyncSession, operation: str) -> None:
    """Commit, converting database failures into AppError."""
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise classify_database_error(e, operation)


async def _load_item(db: AsyncSession, item_id: int) -> Optional[MenuItem]:
    result = await db.execute(
        select(MenuItem)
        .options(selectinload(MenuItem.category))
        .where(MenuItem.id == item_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


# =============================================================================
# APPLICATION FACTORY
# =============================================================================

def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    cache: Optional[DataCache] = None,
) -> FastAPI:
    """
    Build the FastAPI application around an explicit database handle.

    Args:
        settings: Application settings (defaults to get_settings())
        database: Database handle (defaults to one built from settings)
        cache: Data cache shared by the repository

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = get_settings()
    if database is None:
        database = Database(settings.database_url, echo=settings.database_echo)
    if cache is None:
        cache = DataCache()

    app = FastAPI(
        title=settings.app_name,
        description="Arabic-first restaurant menu with a small content-management API.",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.settings = settings
    app.state.database = database
    app.state.cache = cache
    app.state.repository = MenuRepository(
        cache,
        settings_ttl=settings.settings_cache_ttl,
        categories_ttl=settings.categories_cache_ttl,
        items_ttl=settings.items_cache_ttl,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_middleware(app)
    _register_exception_handlers(app, settings)
    _register_routes(app)
    return app


# =============================================================================
# MIDDLEWARE
# =============================================================================

def _register_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - start) * 1000, 1)

        message = (
            f"{request.method} {request.url.path} → {response.status_code} "
            f"({duration_ms} ms)"
        )
        if response.status_code >= 400:
            logger.warning(f"HTTP request failed: {message}")
        else:
            logger.info(message)
        return response


# =============================================================================
# ERROR HANDLERS
# =============================================================================

def _register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"{exc.code.value} on {request.url.path}: {exc.message} {exc.context}")
        status_code, content = to_error_response(exc)
        return JSONResponse(status_code=status_code, content=content)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        problems = []
        for error in exc.errors():
            location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
            problems.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
        error = ValidationFailedError("; ".join(problems) or None)
        logger.info(f"Validation failed on {request.url.path}: {error.message}")
        status_code, content = to_error_response(error)
        return JSONResponse(status_code=status_code, content=content)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all exception handler."""
        logger.exception(f"Unhandled exception: {exc}")
        status_code, content = to_error_response(exc, debug=settings.debug)
        return JSONResponse(status_code=status_code, content=content)


# =============================================================================
# ROUTES
# =============================================================================

def _register_routes(app: FastAPI) -> None:

    # -------------------------------------------------------------------------
    # ROOT & HEALTH
    # -------------------------------------------------------------------------

    @app.get("/", tags=["Root"])
    async def root(request: Request) -> dict[str, str]:
        """API root with navigation links."""
        settings: Settings = request.app.state.settings
        return {
            "message": f"🍽️ Welcome to {settings.app_name}",
            "version": settings.app_version,
            "environment": settings.env_mode.value,
            "documentation": "/docs",
            "menu": "/api/menu",
            "health": "/health",
        }

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["Health"],
        summary="System Health Check",
    )
    async def health_check(request: Request) -> HealthResponse:
        """Verify the database and the cache are operational."""
        database: Database = request.app.state.database
        cache: DataCache = request.app.state.cache

        db_status = "healthy" if await database.ping() else "unhealthy"

        cache.set("health-check", "ok", ttl=5)
        cache_status = "healthy" if cache.get("health-check") == "ok" else "unhealthy"
        cache.delete("health-check")

        overall = "operational" if db_status == cache_status == "healthy" else "degraded"
        return HealthResponse(
            status=overall,
            database=db_status,
            cache=cache_status,
            timestamp=datetime.now(),
        )

    # -------------------------------------------------------------------------
    # PUBLIC MENU
    # -------------------------------------------------------------------------

    @app.get(
        "/api/menu",
        response_model=list[CategoryWithItemsResponse],
        tags=["Menu"],
        summary="Visible categories with items",
    )
    async def get_menu(
        db: AsyncSession = Depends(get_db),
        repository: MenuRepository = Depends(get_repository),
    ):
        return await repository.get_categories(db, include_items=True)

    @app.get(
        "/api/menu/categories/{category_id}/items",
        response_model=list[MenuItemResponse],
        responses=ERROR_RESPONSES,
        tags=["Menu"],
    )
    async def get_menu_category_items(
        category_id: int,
        db: AsyncSession = Depends(get_db),
        repository: MenuRepository = Depends(get_repository),
    ):
        category = await get_category(db, category_id)
        if category is None or not category.visible:
            raise NotFoundError("Category", category_id)
        return await repository.get_items_by_category(db, category_id)

    @app.get(
        "/api/settings",
        response_model=SettingsResponse,
        tags=["Menu"],
    )
    async def get_public_settings(
        db: AsyncSession = Depends(get_db),
        repository: MenuRepository = Depends(get_repository),
    ):
        return await repository.get_settings(db)

    # -------------------------------------------------------------------------
    # ADMIN LOGIN
    # -------------------------------------------------------------------------

    @app.post(
        "/api/admin/login",
        response_model=LoginResponse,
        responses=ERROR_RESPONSES,
        tags=["Admin"],
    )
    @app.post(
        "/api/auth/login",
        response_model=LoginResponse,
        responses=ERROR_RESPONSES,
        tags=["Admin"],
        include_in_schema=False,
    )
    async def admin_login(
        credentials: LoginRequest,
        request: Request,
        db: AsyncSession = Depends(get_db),
    ) -> LoginResponse:
        """Exchange admin credentials for a signed bearer token."""
        if not credentials.email or not credentials.password:
            raise ValidationFailedError("Email and password are required")

        result = await db.execute(
            select(Admin).where(Admin.email == credentials.email.strip().lower())
        )
        admin = result.scalar_one_or_none()

        if admin is None or not verify_password(admin.password_hash, credentials.password):
            logger.warning(f"Failed admin login for {credentials.email}")
            raise AuthenticationError("Invalid credentials")

        token = create_admin_token(request.app.state.settings, admin.id, admin.email)
        logger.info(f"Admin #{admin.id} logged in")

        return LoginResponse(
            message="Login successful",
            token=token,
            user=AdminUser.model_validate(admin),
        )

    # -------------------------------------------------------------------------
    # ADMIN CATEGORIES
    # -------------------------------------------------------------------------

    @app.get(
        "/api/admin/categories",
        response_model=list[CategoryWithItemsResponse],
        responses=ERROR_RESPONSES,
        tags=["Admin Categories"],
    )
    async def admin_list_categories(
        db: AsyncSession = Depends(get_db),
        admin: AdminIdentity = Depends(require_admin),
    ):
        """All categories, hidden ones included."""
        return await list_categories(db, include_items=True)

    @app.post(
        "/api/admin/categories",
        response_model=CategoryWithItemsResponse,
        responses=ERROR_RESPONSES,
        tags=["Admin Categories"],
    )
    async def admin_create_category(
        payload: CategoryCreate,
        db: AsyncSession = Depends(get_db),
        repository: MenuRepository = Depends(get_repository),
        admin: AdminIdentity = Depends(require_admin),
    ):
        order = payload.order
        if order is None:
            order = await next_category_order(db)

        category = Category(
            name=payload.name,
            description=payload.description,
            image=payload.image,
            order=order,
            visible=payload.visible,
            items=[],
        )
        db.add(category)
        await _commit(db, "create category")
        repository.clear_cache(CacheKind.CATEGORIES)

        logger.info(f"Category #{category.id} created: {category.name}")
        return category

    @app.get(
        "/api/admin/categories/{category_id}",
        response_model=CategoryWithItemsResponse,
        responses=ERROR_RESPONSES,
        tags=["Admin Categories"],
    )
    async def admin_get_category(
        category_id: int,
        db: AsyncSession = Depends(get_db),
        admin: AdminIdentity = Depends(require_admin),
    ):
        category = await get_category(db, category_id, include_items=True)
        if category is None:
            raise NotFoundError("Category", category_id)
        return category

    @app.put(
        "/api/admin/categories/{category_id}",
        response_model=CategoryWithItemsResponse,
        responses=ERROR_RESPONSES,
        tags=["Admin Categories"],
    )
    async def admin_update_category(
        category_id: int,
        payload: CategoryUpdate,
        db: AsyncSession = Depends(get_db),
        repository: MenuRepository = Depends(get_repository),
        admin: AdminIdentity = Depends(require_admin),
    ):
        category = await get_category(db, category_id, include_items=True)
        if category is None:
            raise NotFoundError("Category", category_id)

        for key, value in payload.model_dump(exclude_unset=True).items():
            if value is None and key in NON_NULLABLE_CATEGORY_FIELDS:
                continue
            setattr(category, key, value)

        await _commit(db, "update category")
        repository.clear_cache(CacheKind.CATEGORIES)
        return category

    @app.delete(
        "/api/admin/categories/{category_id}",
        response_model=MessageResponse,
        responses=ERROR_RESPONSES,
        tags=["Admin Categories"],
    )
    async def admin_delete_category(
        category_id: int,
        db: AsyncSession = Depends(get_db),
        repository: MenuRepository = Depends(get_repository),
        admin: AdminIdentity = Depends(require_admin),
    ) -> MessageResponse:
        """Delete a category together with all of its items."""
        category = await get_category(db, category_id)
        if category is None:
            raise NotFoundError("Category", category_id)

        try:
            items_removed = await delete_category_cascade(db, category_id)
        except SQLAlchemyError as e:
            await db.rollback()
            raise classify_database_error(e, "delete category")
        await _commit(db, "delete category")
        repository.clear_cache(CacheKind.ALL)

        logger.info(f"Category #{category_id} deleted with {items_removed} items")
        return MessageResponse(message="Category deleted successfully")

    # -------------------------------------------------------------------------
    # ADMIN ITEMS
    # -------------------------------------------------------------------------

    @app.get(
        "/api/admin/items",
        response_model=list[MenuItemWithCategoryResponse],
        responses=ERROR_RESPONSES,
        tags=["Admin Items"],
    )
    async def admin_list_items(
        db: AsyncSession = Depends(get_db),
        admin: AdminIdentity = Depends(require_admin),
    ):
        result = await db.execute(
            select(MenuItem)
            .options(selectinload(MenuItem.category))
            .order_by(MenuItem.created_at.asc(), MenuItem.id.asc())
        )
        return result.scalars().all()

    @app.post(
        "/api/admin/items",
        response_model=MenuItemWithCategoryResponse,
        responses=ERROR_RESPONSES,
        tags=["Admin Items"],
    )
    async def admin_create_item(
        payload: MenuItemCreate,
        db: AsyncSession = Depends(get_db),
        repository: MenuRepository = Depends(get_repository),
        admin: AdminIdentity = Depends(require_admin),
    ):
        if await get_category(db, payload.category_id) is None:
            raise NotFoundError("Category", payload.category_id)

        item = MenuItem(
            name=payload.name,
            description=payload.description,
            price=payload.price,
            category_id=payload.category_id,
        )
        db.add(item)
        await _commit(db, "create menu item")
        repository.clear_cache(CacheKind.ITEMS)

        logger.info(f"Menu item #{item.id} created in category #{item.category_id}")
        return await _load_item(db, item.id)

    @app.get(
        "/api/admin/items/{item_id}",
        response_model=MenuItemWithCategoryResponse,
        responses=ERROR_RESPONSES,
        tags=["Admin Items"],
    )
    async def admin_get_item(
        item_id: int,
        db: AsyncSession = Depends(get_db),
        admin: AdminIdentity = Depends(require_admin),
    ):
        item = await _load_item(db, item_id)
        if item is None:
            raise NotFoundError("Item", item_id)
        return item

    @app.put(
        "/api/admin/items/{item_id}",
        response_model=MenuItemWithCategoryResponse,
        responses=ERROR_RESPONSES,
        tags=["Admin Items"],
    )
    async def admin_update_item(
        item_id: int,
        payload: MenuItemCreate,
        db: AsyncSession = Depends(get_db),
        repository: MenuRepository = Depends(get_repository),
        admin: AdminIdentity = Depends(require_admin),
    ):
        """Replace an item's fields; name, price and category are required."""
        item = await _load_item(db, item_id)
        if item is None:
            raise NotFoundError("Item", item_id)
        if await get_category(db, payload.category_id) is None:
            raise NotFoundError("Category", payload.category_id)

        item.name = payload.name
        item.description = payload.description
        item.price = payload.price
        item.category_id = payload.category_id

        await _commit(db, "update menu item")
        repository.clear_cache(CacheKind.ITEMS)

        # populate_existing makes the category follow a category change
        return await _load_item(db, item_id)

    @app.delete(
        "/api/admin/items/{item_id}",
        response_model=MessageResponse,
        responses=ERROR_RESPONSES,
        tags=["Admin Items"],
    )
    async def admin_delete_item(
        item_id: int,
        db: AsyncSession = Depends(get_db),
        repository: MenuRepository = Depends(get_repository),
        admin: AdminIdentity = Depends(require_admin),
    ) -> MessageResponse:
        item = await db.get(MenuItem, item_id)
        if item is None:
            raise NotFoundError("Item", item_id)

        await db.delete(item)
        await _commit(db, "delete menu item")
        repository.clear_cache(CacheKind.ITEMS)
        return MessageResponse(message="Item deleted successfully")

    # -------------------------------------------------------------------------
    # ADMIN SETTINGS
    # -------------------------------------------------------------------------

    @app.get(
        "/api/admin/settings",
        response_model=SettingsResponse,
        responses=ERROR_RESPONSES,
        tags=["Admin Settings"],
    )
    async def admin_get_settings(
        db: AsyncSession = Depends(get_db),
        admin: AdminIdentity = Depends(require_admin),
    ):
        return await get_or_create_settings(db)

    @app.put(
        "/api/admin/settings",
        response_model=SettingsResponse,
        responses=ERROR_RESPONSES,
        tags=["Admin Settings"],
    )
    async def admin_update_settings(
        payload: SettingsUpdate,
        db: AsyncSession = Depends(get_db),
        repository: MenuRepository = Depends(get_repository),
        admin: AdminIdentity = Depends(require_admin),
    ):
        """Update the settings row, creating it first if it does not exist."""
        settings_row = await get_or_create_settings(db)

        for key, value in payload.model_dump(exclude_unset=True).items():
            if value is None and key == "name":
                continue
            setattr(settings_row, key, value)

        await _commit(db, "update settings")
        repository.clear_cache(CacheKind.SETTINGS)

        logger.info(f"Restaurant settings updated by admin #{admin.admin_id}")
        return settings_row


setup_logging()
app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "restaurant_menu.main:app",
        host=_settings.api_host,
        port=_settings.api_port,
        reload=_settings.debug,
    )
