"""
Presentation Layer - System Controller

Health and build information of the forecast service.
"""

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from spp_forecast.application.dtos.health_dto import ApplicationInfoDTO, SystemHealthDTO
from spp_forecast.application.use_cases.health_use_cases import (
    GetApplicationInfoUseCase,
    GetHealthStatusUseCase,
)
from spp_forecast.main.container import AppContainer
from spp_forecast.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["System"])


@router.get(
    "/health",
    response_model=SystemHealthDTO,
    summary="Service health",
    description="""
    Reports whether ERCOT credentials are configured, whether the ERCOT public
    API answers and the state of the in-memory caches. Pass ``upstream=false``
    for a liveness check that does not call ERCOT.
    """,
)
@inject
async def health(
    response: Response,
    upstream: bool = Query(default=True, description="Probe the ERCOT API"),
    get_health_status_use_case: GetHealthStatusUseCase = Depends(
        Provide[AppContainer.get_health_status_use_case]
    ),
) -> SystemHealthDTO:
    try:
        health_status = await get_health_status_use_case.execute(upstream)
    except Exception as exc:  # pragma: no cover - defensive logging path
        logger.error("system.health.failure", error=str(exc), exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Unable to retrieve system health status",
        ) from exc

    response.headers["Cache-Control"] = "no-store"
    logger.debug(
        "system.health.checked", status=health_status.status.value, upstream=upstream
    )
    return health_status


@router.get("/info", response_model=ApplicationInfoDTO, summary="Service information")
@inject
async def info(
    request: Request,
    get_application_info_use_case: GetApplicationInfoUseCase = Depends(
        Provide[AppContainer.get_application_info_use_case]
    ),
) -> ApplicationInfoDTO:
    try:
        return await get_application_info_use_case.execute(
            getattr(request.app.state, "started_at", None)
        )
    except Exception as exc:  # pragma: no cover - defensive logging path
        logger.error("system.info.failure", error=str(exc), exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to retrieve application info",
        ) from exc
