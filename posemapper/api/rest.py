from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from posemapper.api.auth import require_http_token
from posemapper.core.constants import JOINT_DEFS, PLAYER_DEFS, SEGMENTS, Joint, PlayerJoint
from posemapper.core.geometry import Reorientation, is_rigid
from posemapper.core.poses import facing_position
from posemapper.core.position import Position
from posemapper.core.reorientation import PositionReorientation, apply
from posemapper.models.api import (
    ApplyRequest,
    Coordinates,
    ReorientationModel,
    ReorientedRequest,
    ReorientedResponse,
    SpringRequest,
    SpringResponse,
)
from posemapper.models.config import ConfigUpdate

router = APIRouter(prefix="/api")


def _runtime(request: Request):
    return request.app.state.runtime


def _position(values: Coordinates, name: str) -> Position:
    try:
        return Position(values)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"{name}: {exc}") from exc


@router.get("/config")
def get_config(request: Request):
    runtime = _runtime(request)
    require_http_token(request, runtime.config_store.config.server.token)
    return runtime.config_store.config.maybe_masked_dump(mask_token=True)


@router.put("/config")
def put_config(request: Request, payload: ConfigUpdate):
    runtime = _runtime(request)
    require_http_token(request, runtime.config_store.config.server.token)
    cfg = runtime.config_store.update(payload)
    runtime.reconfigure(cfg)
    return cfg.maybe_masked_dump(mask_token=True)


@router.get("/skeleton")
def skeleton():
    return {
        "joints": [
            {"name": d.joint.name, "radius": d.radius, "draggable": d.draggable}
            for d in JOINT_DEFS
        ],
        "segments": [
            {
                "ends": [s.ends[0].name, s.ends[1].name],
                "length": s.length,
                "midpoint_radius": s.midpoint_radius,
                "visible": s.visible,
            }
            for s in SEGMENTS
        ],
        "players": [{"color": list(d.color)} for d in PLAYER_DEFS],
    }


@router.get("/position/default")
def default_position():
    return {"position": facing_position().to_list()}


@router.post("/spring", response_model=SpringResponse)
def spring_position(request: Request, payload: SpringRequest):
    solver = _runtime(request).solver()
    position = _position(payload.position, "position")
    fixed = None
    if payload.fixed is not None:
        fixed = PlayerJoint(payload.fixed.player, Joint[payload.fixed.joint])
    solver.solve_position(position, fixed)
    return SpringResponse(
        position=position.to_list(),
        iterations=solver.last_iterations,
        max_error=solver.last_max_error,
    )


@router.post("/reoriented", response_model=ReorientedResponse)
def reoriented(request: Request, payload: ReorientedRequest):
    detector = _runtime(request).detector
    reference = _position(payload.reference, "reference")
    candidate = _position(payload.candidate, "candidate")
    r = detector.detect(reference, candidate)
    if r is None:
        return ReorientedResponse(found=False)
    return ReorientedResponse(found=True, reorientation=ReorientationModel(**r.to_dict()))


@router.post("/apply")
def apply_reorientation(payload: ApplyRequest):
    position = _position(payload.position, "position")
    try:
        spatial = Reorientation(payload.reorientation.rotation, payload.reorientation.translation)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"reorientation: {exc}") from exc
    if not is_rigid(spatial.rotation):
        raise HTTPException(status_code=400, detail="reorientation: rotation is not orthogonal")
    r = PositionReorientation(spatial, payload.reorientation.swap_players)
    return {"position": apply(r, position).to_list()}
