# crm/utils/decorators.py
import inspect
from functools import wraps
from time import time

from sqlalchemy.exc import SQLAlchemyError

from crm.core.errors import StorageFault
from crm.core.logging import get_logger

logger = get_logger(__name__)


def log_request(func):
    """
    Decorator to log incoming requests and their processing time.
    Works with both `def` and `async def` endpoints.
    """

    @wraps(func)
    async def wrapper(*args, **kwargs):
        start_time = time()
        logger.info(f"Request started for endpoint: {func.__name__}")

        if inspect.iscoroutinefunction(func):
            response = await func(*args, **kwargs)
        else:
            response = func(*args, **kwargs)

        process_time = time() - start_time
        logger.info(
            f"Request to endpoint {func.__name__} finished in {process_time:.4f} seconds"
        )
        return response

    return wrapper


def handle_storage_errors(action: str):
    """
    Decorator for CRUD functions. Any SQLAlchemy error escaping the function is
    logged with its traceback and replaced by an opaque StorageFault
    ("Failed to <action>"). Domain errors (NotFound, Conflict, ...) pass through.
    """

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except SQLAlchemyError:
                logger.exception(f"Storage error while trying to {action}")
                raise StorageFault(f"Failed to {action}")

        return wrapper

    return decorator
