"""
Request logging middleware
"""
from fastapi import Request
from typing import Callable
import logging
import time
from ..models.subnet import Subnet

logger = logging.getLogger(__name__)

SUBNET_NAMES = {subnet.value for subnet in Subnet}


def subnet_of(path: str) -> str:
    """Subnet named by the first path segment, "-" for anything else (root, docs, typos)"""
    head = path.strip("/").split("/", 1)[0]
    return head if head in SUBNET_NAMES else "-"


async def logging_middleware(request: Request, call_next: Callable):
    """
    One line per request: subnet, endpoint, outcome and time spent.
    Storage failures are logged with their traceback by the database error handler,
    here they only show up as "failed".
    """
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000

    subnet = subnet_of(request.url.path)
    status_code = response.status_code

    if status_code >= 500:
        logger.warning(f"[{subnet}] {request.method} {request.url.path} failed → {status_code} ({elapsed_ms:.0f}ms)")
    elif status_code >= 400:
        logger.info(f"[{subnet}] {request.method} {request.url.path} rejected → {status_code} ({elapsed_ms:.0f}ms)")
    else:
        logger.info(f"[{subnet}] {request.method} {request.url.path} → {status_code} ({elapsed_ms:.0f}ms)")

    return response
