from fastapi import APIRouter, HTTPException, Request

from location_base.api.schemas import (
    AlertOut,
    CaptureOut,
    LocationItem,
    LocationOut,
    ScreenOut,
    ThemeOut,
)
from location_base.controller import AppController, CaptureOutcome
from location_base.logging_config import get_logger
from location_base.theme import APP_TITLE

logger = get_logger(__name__)

router = APIRouter()

# Failed captures map to these statuses; the alert goes out as the detail
CAPTURE_ERROR_STATUS = {
    CaptureOutcome.PERMISSION_DENIED: 403,
    CaptureOutcome.BUSY: 409,
    CaptureOutcome.STORAGE_FAILED: 500,
    CaptureOutcome.LOCATION_UNAVAILABLE: 503,
}


def _controller(request: Request) -> AppController:
    return request.app.state.controller


def _theme_out(controller: AppController) -> ThemeOut:
    return ThemeOut(dark_mode=controller.theme.dark, colors=dict(controller.theme.colors))


@router.get("/screen", response_model=ScreenOut)
def get_screen(request: Request):
    """Current state of the single screen."""
    controller = _controller(request)
    alert = controller.last_alert
    return ScreenOut(
        title=APP_TITLE,
        theme=_theme_out(controller),
        is_loading=controller.is_loading,
        locations=[LocationItem.from_record(r) for r in controller.locations],
        alert=AlertOut(title=alert.title, message=alert.message) if alert else None,
    )


@router.get("/locations", response_model=list[LocationOut])
def list_locations(request: Request):
    return [LocationOut.from_record(r) for r in _controller(request).locations]


@router.post("/locations/capture", response_model=CaptureOut, status_code=201)
async def capture_location(request: Request):
    """Request permission, read one fix, store it and reload the list."""
    controller = _controller(request)
    result = await controller.capture_location()

    if not result.ok:
        status = CAPTURE_ERROR_STATUS[result.outcome]
        alert = controller.last_alert
        detail = {"outcome": result.outcome.value}
        if result.outcome is not CaptureOutcome.BUSY and alert is not None:
            detail.update(title=alert.title, message=alert.message)
        logger.info("Capture failed with %s", result.outcome.value)
        raise HTTPException(status_code=status, detail=detail)

    return CaptureOut(
        location=LocationOut.from_record(result.record),
        total=len(controller.locations),
    )


@router.get("/theme", response_model=ThemeOut)
def get_theme(request: Request):
    return _theme_out(_controller(request))


@router.post("/theme/toggle", response_model=ThemeOut)
async def toggle_theme(request: Request):
    controller = _controller(request)
    await controller.toggle_theme()
    return _theme_out(controller)
