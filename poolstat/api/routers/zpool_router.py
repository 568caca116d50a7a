"""
zpool status/list API router.
"""
import logging

from fastapi import APIRouter, HTTPException, Depends

from ..dependencies import get_pool_status_service, get_list_parser
from ..models import (
    StatusParseRequest, ListParseRequest,
    PoolStatusResponse, PoolStatusListResponse, ListRowsResponse
)
from ...zpool.core.exceptions.pool_exceptions import (
    PoolStatusException,
    PoolNotFoundError,
    ValidationException
)
from ...zpool.parsers.status_parser import ZpoolStatusParser
from ...zpool.parsers.list_parser import ZpoolListParser
from ...zpool.services.pool_status_service import PoolStatusService

logger = logging.getLogger(__name__)


router = APIRouter(prefix="/api/v1/zpool", tags=["zpool"])


def _http_error(error: PoolStatusException) -> HTTPException:
    if isinstance(error, PoolNotFoundError):
        status_code = 404
    elif isinstance(error, ValidationException):
        status_code = 400
    else:
        status_code = 502
    return HTTPException(status_code=status_code, detail=error.to_dict())


@router.post("/status/parse", response_model=PoolStatusResponse)
async def parse_status(request: StatusParseRequest):
    """Parse a raw `zpool status` report."""
    result = ZpoolStatusParser(strict=request.strict).parse(request.report)
    if result.is_failure:
        raise HTTPException(status_code=422, detail=result.error.to_dict())

    return PoolStatusResponse(success=True, pool=result.value.to_dict())


@router.post("/list/parse", response_model=ListRowsResponse)
async def parse_list(
    request: ListParseRequest,
    parser: ZpoolListParser = Depends(get_list_parser)
):
    """Parse raw `zpool list -H -p` output."""
    if request.strict:
        result = parser.parse(request.output)
        if result.is_failure:
            raise HTTPException(status_code=422, detail=result.error.to_dict())
        rows, errors = result.value, []
    else:
        outcome = parser.parse_lenient(request.output)
        rows, errors = outcome.rows, outcome.errors

    return ListRowsResponse(
        success=not errors,
        rows=[row.to_dict() for row in rows],
        errors=[error.to_dict() for error in errors],
        count=len(rows)
    )


@router.get("/pools", response_model=PoolStatusListResponse)
async def list_pool_statuses(
    service: PoolStatusService = Depends(get_pool_status_service)
):
    """Full status of every pool, with list figures applied."""
    result = await service.get_all_pool_statuses()
    if result.is_failure:
        logger.error(f"Failed to get pool statuses: {result.error}")
        raise _http_error(result.error)

    pools = [status.to_dict() for status in result.value]
    return PoolStatusListResponse(success=True, pools=pools, count=len(pools))


@router.get("/pools/{pool_name}", response_model=PoolStatusResponse)
async def get_pool_status(
    pool_name: str,
    service: PoolStatusService = Depends(get_pool_status_service)
):
    """Full status of one pool."""
    result = await service.get_pool_status(pool_name)
    if result.is_failure:
        raise _http_error(result.error)

    return PoolStatusResponse(success=True, pool=result.value.to_dict())
