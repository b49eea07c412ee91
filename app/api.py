"""Routes of the mock SwitchBot / New Relic upstream used for local runs."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from app.schemas import EventIngestAck, SwitchBotStatusBody, SwitchBotStatusResponse
from settings import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter()


def get_mock_settings() -> Settings:
    return get_settings()


@router.get(
    "/v1.1/devices/{device_id}/status",
    response_model=SwitchBotStatusResponse,
    response_model_by_alias=True,
    summary="Mocked SwitchBot device status.",
)
async def device_status(
    device_id: str,
    authorization: str | None = Header(default=None),
    settings: Settings = Depends(get_mock_settings),
) -> SwitchBotStatusResponse:
    logger.info("Mock status request", extra={"device_id": device_id})
    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header required",
        )

    return SwitchBotStatusResponse(
        status_code=100,
        message="success",
        body=SwitchBotStatusBody(
            device_id=device_id,
            device_type="Meter",
            hub_device_id="hub-123",
            humidity=settings.mock_humidity,
            temperature=settings.mock_temperature,
            version="V4.2",
            battery=settings.mock_battery,
            temperature_scale="c",
        ),
    )


@router.post(
    "/v1/accounts/{account_id}/events",
    response_model=EventIngestAck,
    summary="Mocked New Relic event ingest; logs and acknowledges the body.",
)
async def ingest_events(account_id: str, request: Request) -> EventIngestAck:
    body = await request.body()
    logger.info(
        "Mock event ingest for account %s: %s",
        account_id,
        body.decode("utf-8", errors="replace"),
    )
    return EventIngestAck(success=True)


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}
