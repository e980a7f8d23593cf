from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from structlog import get_logger

logger = get_logger()


class ServiceError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "An error occurred"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)


class ValidationError(ServiceError):
    status_code = 422
    message = "Invalid request"


class DuplicateEmail(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "An account with the same email already exists"


class InvalidCredentials(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid email or password"


class AuthenticationRequired(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Authentication required"


class MissingToken(AuthenticationRequired):
    pass


class InvalidOrExpiredToken(AuthenticationRequired):
    message = "Invalid token"


class NotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class PropertyNotFound(NotFound):
    message = "Property not found"


class ProfileNotFound(NotFound):
    message = "Profile not found"


class RequestNotFound(NotFound):
    message = "Property request not found"


class NotAuthorized(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Not authorized"


class DuplicateRequest(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Request already sent for this property"


class StoreError(ServiceError):
    pass


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(ServiceError)
    async def service_error(request: Request, exc: ServiceError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=ValidationError.status_code,
            content={"error": ValidationError.message, "details": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(SQLAlchemyError)
    async def store_error(request: Request, exc: SQLAlchemyError):
        logger.error("Store operation failed", path=request.url.path, error=str(exc))
        return JSONResponse(status_code=StoreError.status_code, content={"error": StoreError.message})
