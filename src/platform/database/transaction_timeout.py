from contextlib import contextmanager
from typing import Iterator, Optional

import anyio

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import OperationTimeoutError
from src.platform.logging.loguru_io import Logger


@contextmanager
def transaction_timeout(timeout: Optional[float], *, operation: str) -> Iterator[float]:
    """
    Bound a Unit of Work block by `timeout` seconds.

    On expiry the block is cancelled, the UoW rolls back on the way out and
    OperationTimeoutError is raised; nothing is committed.

    Usage:
        with transaction_timeout(timeout, operation='create_booking'):
            async with uow_factory() as uow:
                ...
    """
    seconds = settings.BOOKING_OPERATION_TIMEOUT_SECONDS if timeout is None else timeout
    try:
        with anyio.fail_after(seconds):
            yield seconds
    except TimeoutError as e:
        Logger.base.warning(f'⏱️ [TIMEOUT] {operation} exceeded {seconds}s, transaction aborted')
        raise OperationTimeoutError(f'{operation} timed out after {seconds}s') from e
