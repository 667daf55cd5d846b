import logging
import time
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from extavatars.application.avatars import AvatarUrlResolver
from extavatars.application.health import check_health
from extavatars.config.settings import get_settings
from extavatars.presentation.api.dependencies.avatars import get_resolver
from extavatars.presentation.api.routes.v1 import router as v1_router
from extavatars.presentation.api.schemas import HealthResponse

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("extavatars.api")
settings = get_settings()


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware для логирования запросов."""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        logger.info(
            f"Request: {request.method} {request.url.path}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "client": request.client.host if request.client else None,
            },
        )

        try:
            response = await call_next(request)
            process_time = time.time() - start_time

            logger.info(
                f"Response: {request.method} {request.url.path} - {response.status_code}",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "process_time": f"{process_time:.3f}s",
                },
            )

            response.headers["X-Process-Time"] = f"{process_time:.3f}"

            return response
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                f"Error: {request.method} {request.url.path} - {str(e)}",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "error": str(e),
                    "process_time": f"{process_time:.3f}s",
                },
                exc_info=True,
            )
            raise


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Приложение запущено")
    yield
    logger.info("Приложение остановлено")


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        description="""
        Аватары пользователей по внешнему URL

        - GET /api/v1/accounts/{username}/avatar: редирект на картинку аватара
        - GET /api/v1/accounts/{username}/avatar.change.url: ссылка на смену аватара

        Шаблоны задаются переменными окружения AVATAR__URL и AVATAR__CHANGE_URL,
        маркер %s заменяется на URL-кодированное имя пользователя.
        """,
        lifespan=lifespan,
    )

    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(v1_router)

    # Обработчик исключений
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": "Internal server error" if not settings.debug else str(exc),
            },
        )

    @app.get("/health", response_model=HealthResponse)
    async def health(resolver: AvatarUrlResolver = Depends(get_resolver)):
        return check_health(resolver)

    return app


app = create_app()
