"""FastAPI entry point - thin layer over the simulation context."""

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Literal

from fastapi import Depends, FastAPI, Request, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ValidationError

from core.errors import (
    FuseNotResettableRejection,
    FuseTrippedRejection,
    OverloadRejection,
    SimulationRejection,
    UnknownDeviceRejection,
)
from core.events import DeviceToggleRejected, FuseResetRejected, InitialData, SimulationEvent, to_message
from core.models import BadgeKind, BadgeProgress, EfficiencyLevel, HistoryEntry, OverloadStatus, SessionStats
from services.broadcast import ConnectionManager
from simulation import DEFAULT_SIM_CONFIG, Scheduler, SimConfig, SimulationContext

logging.basicConfig(level=logging.WARNING, format="%(name)s | %(message)s")
logging.getLogger("simulation").setLevel(logging.INFO)
logging.getLogger("services").setLevel(logging.INFO)

logger = logging.getLogger(__name__)


class ClientCommand(BaseModel):
    type: Literal["initial_data", "power_update", "toggle_device", "reset_fuse", "reset_simulation"]
    room_id: str | None = None
    device_kind: str | None = None


class OverloadSettings(BaseModel):
    threshold_w: int
    trip_delay_ms: int
    safety_margin_w: int


class OverloadProtectionResponse(BaseModel):
    settings: OverloadSettings
    status: OverloadStatus


class EfficiencyResponse(BaseModel):
    score: int
    level: EfficiencyLevel
    badge: str
    badges: dict[BadgeKind, BadgeProgress]
    session_stats: SessionStats
    history: list[HistoryEntry]


def get_simulation(request: Request) -> SimulationContext:
    return request.app.state.simulation


def _rejection_event(rejection: SimulationRejection) -> SimulationEvent | None:
    """Map a rejection to the message sent back to the requesting client."""
    match rejection:
        case FuseTrippedRejection() | OverloadRejection():
            return DeviceToggleRejected(message=rejection.message)
        case FuseNotResettableRejection():
            return FuseResetRejected(message=rejection.message)
        case UnknownDeviceRejection():
            logger.warning("Ignoring command: %s", rejection.message)
            return None
    return None


def _handle_command(
    websocket: WebSocket,
    simulation: SimulationContext,
    connections: ConnectionManager,
    command: ClientCommand,
) -> None:
    try:
        match command.type:
            case "initial_data":
                connections.reply(websocket, to_message(InitialData(simulation.initial_state())))
            case "power_update":
                simulation.refresh()
            case "toggle_device":
                simulation.toggle_device(command.room_id, command.device_kind)
            case "reset_fuse":
                simulation.reset_fuse()
            case "reset_simulation":
                simulation.reset_simulation()
    except SimulationRejection as rejection:
        event = _rejection_event(rejection)
        if event is not None:
            connections.reply(websocket, to_message(event))


def create_app(
    config: SimConfig = DEFAULT_SIM_CONFIG,
    scheduler: Scheduler | None = None,
    now: Callable[[], datetime] | None = None,
) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        simulation = SimulationContext(config, scheduler=scheduler, now=now or datetime.now)
        connections = ConnectionManager()
        connections.start()
        simulation.subscribe(connections)
        app.state.simulation = simulation
        app.state.connections = connections
        logger.info(
            "Overload protection: %d W threshold, %d W safety margin, %d ms reset delay",
            config.overload_threshold_w,
            config.safety_margin_w,
            config.trip_delay_ms,
        )
        yield
        simulation.shutdown()
        await connections.stop()

    app = FastAPI(title="House Power Simulator", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/overload-protection")
    async def get_overload_protection(
        simulation: SimulationContext = Depends(get_simulation),
    ) -> OverloadProtectionResponse:
        """Overload protection settings and current fuse status."""
        cfg = simulation.config
        return OverloadProtectionResponse(
            settings=OverloadSettings(
                threshold_w=cfg.overload_threshold_w,
                trip_delay_ms=cfg.trip_delay_ms,
                safety_margin_w=cfg.safety_margin_w,
            ),
            status=simulation.overload_status(),
        )

    @app.get("/api/efficiency")
    async def get_efficiency(simulation: SimulationContext = Depends(get_simulation)) -> EfficiencyResponse:
        """Current efficiency score, badges, session stats and recent history."""
        current = simulation.efficiency.current
        return EfficiencyResponse(
            score=current.score,
            level=current.level,
            badge=current.badge,
            badges=simulation.badges.snapshot(),
            session_stats=simulation.session.snapshot(),
            history=simulation.efficiency.history_tail(simulation.config.history_tail),
        )

    @app.websocket("/ws")
    async def websocket_endpoint(websocket: WebSocket) -> None:
        simulation: SimulationContext = websocket.app.state.simulation
        connections: ConnectionManager = websocket.app.state.connections
        await connections.connect(websocket)
        simulation.open_session()
        try:
            while True:
                payload = await websocket.receive_text()
                try:
                    command = ClientCommand.model_validate_json(payload)
                except ValidationError as exc:
                    logger.warning("Invalid command %r: %s", payload, exc)
                    connections.reply(websocket, {"type": "invalid_command", "data": {"message": str(exc)}})
                    continue
                logger.debug("Command %s", command.type)
                _handle_command(websocket, simulation, connections, command)
        except WebSocketDisconnect:
            pass
        finally:
            connections.disconnect(websocket)

    return app


app = create_app()
