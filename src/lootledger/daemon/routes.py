"""HTTP routes for the LootLedger API.

Ops classes are synchronous and hit SQLite (and, for imports, the network),
so every handler runs them in the threadpool.
"""

from __future__ import annotations

import importlib.metadata
import json
import time
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from lootledger.core.errors import InvalidInputError, NotFoundError
from lootledger.daemon.models import (
    AcquisitionRequest,
    AssignRequest,
    GearImportRequest,
    MemberCreate,
    MemberUpdate,
    WeekCreate,
    assignment_to_dict,
    history_to_dict,
    loot_to_dict,
    member_to_dict,
    week_to_dict,
)
from lootledger.gear.models import FloorNumber, LootTarget

if TYPE_CHECKING:
    from lootledger.daemon.context import AppContext

BodyT = TypeVar("BodyT", bound=BaseModel)


def _get_version() -> str:
    """Get package version from installed metadata."""
    try:
        return importlib.metadata.version("lootledger")
    except importlib.metadata.PackageNotFoundError:
        return "dev"


async def _body(request: Request, model: type[BodyT]) -> BodyT:
    raw = await request.body()
    try:
        payload: Any = json.loads(raw) if raw else {}
    except json.JSONDecodeError as e:
        raise InvalidInputError.value("body", f"invalid JSON: {e.msg}") from e
    return model.model_validate(payload)


def _query_int(request: Request, name: str) -> int | None:
    raw = request.query_params.get(name)
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise InvalidInputError.value(name, f"expected an integer, got {raw!r}") from None


def create_routes(context: AppContext) -> list[Route]:
    """Create HTTP routes bound to the application context."""
    start_time = time.time()
    version = _get_version()

    async def health(request: Request) -> JSONResponse:
        """Health check endpoint."""
        _ = request  # unused
        return JSONResponse(
            {
                "status": "healthy",
                "version": version,
                "uptime_seconds": round(time.time() - start_time, 1),
            }
        )

    # -----------------------------------------------------------------
    # Roster
    # -----------------------------------------------------------------

    async def list_members(request: Request) -> JSONResponse:
        _ = request
        members = await run_in_threadpool(context.roster.list_members)
        return JSONResponse([member_to_dict(m) for m in members])

    async def create_member(request: Request) -> JSONResponse:
        body = await _body(request, MemberCreate)
        member = await run_in_threadpool(context.roster.create_member, body.name, body.role)
        return JSONResponse(member_to_dict(member), status_code=201)

    async def get_member(request: Request) -> JSONResponse:
        member_id = request.path_params["member_id"]
        member = await run_in_threadpool(context.roster.get_member, member_id)
        return JSONResponse(member_to_dict(member))

    async def update_member(request: Request) -> JSONResponse:
        member_id = request.path_params["member_id"]
        body = await _body(request, MemberUpdate)
        member = await run_in_threadpool(
            lambda: context.roster.update_member(member_id, name=body.name, role=body.role)
        )
        return JSONResponse(member_to_dict(member))

    async def delete_member(request: Request) -> Response:
        member_id = request.path_params["member_id"]
        await run_in_threadpool(context.roster.delete_member, member_id)
        return Response(status_code=204)

    # -----------------------------------------------------------------
    # Gear
    # -----------------------------------------------------------------

    async def import_gear(request: Request) -> JSONResponse:
        member_id = request.path_params["member_id"]
        body = await _body(request, GearImportRequest)
        member = await run_in_threadpool(
            context.gear.import_gear, member_id, body.link, body.spec_type
        )
        return JSONResponse(member_to_dict(member))

    async def set_acquired(request: Request) -> JSONResponse:
        member_id = request.path_params["member_id"]
        body = await _body(request, AcquisitionRequest)
        member = await run_in_threadpool(
            context.gear.set_item_acquired, member_id, body.slot, body.value, body.spec_type
        )
        return JSONResponse(member_to_dict(member))

    async def set_upgrade(request: Request) -> JSONResponse:
        member_id = request.path_params["member_id"]
        body = await _body(request, AcquisitionRequest)
        member = await run_in_threadpool(
            context.gear.set_upgrade_acquired, member_id, body.slot, body.value, body.spec_type
        )
        return JSONResponse(member_to_dict(member))

    # -----------------------------------------------------------------
    # Distribution
    # -----------------------------------------------------------------

    async def eligibility(request: Request) -> JSONResponse:
        floor = FloorNumber.parse(request.path_params["floor"])
        week_number = _query_int(request, "week")
        loot = await run_in_threadpool(context.distribution.get_eligibility, floor, week_number)
        return JSONResponse([loot_to_dict(item) for item in loot])

    async def assign(request: Request) -> JSONResponse:
        body = await _body(request, AssignRequest)
        target = LootTarget.parse(body.target)
        floor = FloorNumber.parse(body.floor)
        assignment_id = await run_in_threadpool(
            context.distribution.assign, body.member_id, target, floor, body.spec_type
        )
        return JSONResponse({"assignmentId": assignment_id}, status_code=201)

    async def undo(request: Request) -> Response:
        assignment_id = request.path_params["assignment_id"]
        await run_in_threadpool(context.distribution.undo, assignment_id)
        return Response(status_code=204)

    async def extra_counts(request: Request) -> JSONResponse:
        raw = request.query_params.get("target")
        if not raw:
            raise InvalidInputError.value("target", "query parameter is required")
        target = LootTarget.parse(raw)
        counts = await run_in_threadpool(context.distribution.get_extra_counts, target)
        return JSONResponse({"target": target.key, "counts": counts})

    # -----------------------------------------------------------------
    # Weeks
    # -----------------------------------------------------------------

    async def list_weeks(request: Request) -> JSONResponse:
        _ = request
        weeks = await run_in_threadpool(context.weeks.list_weeks)
        return JSONResponse([week_to_dict(w) for w in weeks])

    async def create_week(request: Request) -> JSONResponse:
        body = await _body(request, WeekCreate)
        week = await run_in_threadpool(context.weeks.create_week, body.week_number)
        return JSONResponse(week_to_dict(week), status_code=201)

    async def start_week(request: Request) -> JSONResponse:
        _ = request
        week = await run_in_threadpool(context.weeks.start_new_week)
        return JSONResponse(week_to_dict(week), status_code=201)

    async def current_week(request: Request) -> JSONResponse:
        _ = request
        week = await run_in_threadpool(context.weeks.get_current)
        return JSONResponse(week_to_dict(week) if week else None)

    async def set_current_week(request: Request) -> JSONResponse:
        body = await _body(request, WeekCreate)
        week = await run_in_threadpool(context.weeks.set_current_week, body.week_number)
        return JSONResponse(week_to_dict(week))

    async def delete_week(request: Request) -> Response:
        week_number = request.path_params["week_number"]
        await run_in_threadpool(context.weeks.delete_week, week_number)
        return Response(status_code=204)

    # -----------------------------------------------------------------
    # History
    # -----------------------------------------------------------------

    async def all_history(request: Request) -> JSONResponse:
        _ = request
        history = await run_in_threadpool(context.history.all_history)
        return JSONResponse([history_to_dict(h) for h in history])

    async def week_history(request: Request) -> JSONResponse:
        week_number = request.path_params["week_number"]
        history = await run_in_threadpool(context.history.week_history, week_number)
        if history is None:
            raise NotFoundError.week(week_number)
        return JSONResponse(history_to_dict(history))

    return [
        Route("/health", health, methods=["GET"]),
        Route("/members", list_members, methods=["GET"]),
        Route("/members", create_member, methods=["POST"]),
        Route("/members/{member_id}", get_member, methods=["GET"]),
        Route("/members/{member_id}", update_member, methods=["PATCH"]),
        Route("/members/{member_id}", delete_member, methods=["DELETE"]),
        Route("/members/{member_id}/gear/import", import_gear, methods=["POST"]),
        Route("/members/{member_id}/gear/acquired", set_acquired, methods=["POST"]),
        Route("/members/{member_id}/gear/upgrade", set_upgrade, methods=["POST"]),
        Route("/loot/floors/{floor:int}", eligibility, methods=["GET"]),
        Route("/loot/assignments", assign, methods=["POST"]),
        Route("/loot/assignments/{assignment_id}/undo", undo, methods=["POST"]),
        Route("/loot/extra-counts", extra_counts, methods=["GET"]),
        Route("/weeks", list_weeks, methods=["GET"]),
        Route("/weeks", create_week, methods=["POST"]),
        Route("/weeks/start", start_week, methods=["POST"]),
        Route("/weeks/current", current_week, methods=["GET"]),
        Route("/weeks/current", set_current_week, methods=["PUT"]),
        Route("/weeks/{week_number:int}", delete_week, methods=["DELETE"]),
        Route("/history", all_history, methods=["GET"]),
        Route("/history/{week_number:int}", week_history, methods=["GET"]),
    ]
