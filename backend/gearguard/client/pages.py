"""Page loaders: fetch what a screen needs and fall back to demo data.

Each loader tries the API once. When the call fails or comes back empty the
loader substitutes the fixed sample records from :mod:`.demo` and flags the
page with ``demo=True``. There is no retry; loading the page again is the only
way back to live data.
"""

from __future__ import annotations

import json
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Callable

from ..schemas import REPORT_RANGES, REQUEST_STAGES
from . import demo, views
from .api import ApiError, GearGuardClient

logger = logging.getLogger(__name__)


@dataclass
class DashboardPage:
    total_requests: int
    new_requests: int
    in_progress_requests: int
    total_equipment: int
    demo: bool = False


@dataclass
class KanbanPage:
    columns: list[views.KanbanColumn]
    demo: bool = False


@dataclass
class EquipmentPage:
    equipment: list[dict]
    visible: list[dict]
    search: str = ""
    demo: bool = False


@dataclass
class UserPage:
    users: list[dict] = field(default_factory=list)
    visible: list[dict] = field(default_factory=list)
    role: str = "all"
    department: str | None = None
    error: str | None = None


@dataclass
class AdminPage:
    stats: dict
    visible_requests: list[dict]
    status_chart: list[tuple[str, int]]
    filter: str = "all"
    demo: bool = False


@dataclass
class RequestDetailPage:
    request: dict | None = None
    error: str | None = None


@dataclass
class ReportsPage:
    range: str
    report: dict
    drill_down: dict = field(default_factory=dict)
    demo: bool = False


def _fetch_list(fetch: Callable[[], list], label: str) -> list:
    try:
        return fetch() or []
    except ApiError as exc:
        logger.warning("Error fetching %s: %s", label, exc)
        return []


def load_dashboard(client: GearGuardClient) -> DashboardPage:
    with ThreadPoolExecutor(max_workers=2) as pool:
        requests_future = pool.submit(_fetch_list, client.list_requests, "requests")
        equipment_future = pool.submit(_fetch_list, client.list_equipment, "equipment")
        requests, equipment = requests_future.result(), equipment_future.result()

    is_demo = not requests and not equipment
    if is_demo:
        logger.info("Using demo data for Dashboard")
        requests = [{"stage": stage} for stage in demo.DEMO_DASHBOARD_STAGES]
        equipment = list(range(demo.DEMO_DASHBOARD_EQUIPMENT_COUNT))

    try:
        counts = views.dashboard_counts(requests, equipment)
    except (AttributeError, TypeError) as exc:
        logger.warning("Error computing dashboard stats: %s", exc)
        return DashboardPage(**demo.DEMO_DASHBOARD_COUNTS, demo=True)
    return DashboardPage(**counts, demo=is_demo)


def load_kanban(client: GearGuardClient) -> KanbanPage:
    try:
        requests = client.list_requests()
    except ApiError as exc:
        logger.warning("Error fetching requests: %s", exc)
        requests = []
    if requests:
        return KanbanPage(columns=views.kanban_columns(requests))
    logger.info("Using demo data for Kanban board")
    return KanbanPage(columns=views.kanban_columns(demo.demo_requests()), demo=True)


def load_equipment_list(client: GearGuardClient, search: str = "") -> EquipmentPage:
    try:
        equipment = client.list_equipment()
        is_demo = not equipment
        if is_demo:
            logger.info("Using demo data for Equipment List")
            equipment = demo.fresh(demo.DEMO_EQUIPMENT)
    except ApiError as exc:
        logger.warning("Error fetching equipment: %s", exc)
        equipment, is_demo = demo.fresh(demo.DEMO_EQUIPMENT_ON_ERROR), True
    return EquipmentPage(
        equipment=equipment,
        visible=views.search_equipment(equipment, search),
        search=search,
        demo=is_demo,
    )


def load_user_management(
    client: GearGuardClient,
    role: str = "all",
    department: str | None = None,
) -> UserPage:
    # user administration never shows invented people
    try:
        users = client.list_users()
    except ApiError as exc:
        logger.warning("Error fetching users: %s", exc)
        return UserPage(role=role, department=department, error="Failed to load users.")
    return UserPage(
        users=users,
        visible=views.filter_records(users, role=role, department=department),
        role=role,
        department=department,
    )


def load_admin_overview(client: GearGuardClient, flt: str = "all") -> AdminPage:
    try:
        stats = client.admin_stats()
        is_demo = not stats
    except ApiError as exc:
        logger.warning("Failed to fetch admin stats: %s", exc)
        stats, is_demo = None, True
    if is_demo:
        stats = demo.fresh(demo.DEMO_ADMIN_STATS)
    return AdminPage(
        stats=stats,
        visible_requests=views.filter_recent_activity(stats.get("recent_requests", []), flt),
        status_chart=views.status_chart(stats),
        filter=flt,
        demo=is_demo,
    )


def load_request_detail(client: GearGuardClient, request_id: str) -> RequestDetailPage:
    try:
        return RequestDetailPage(request=client.get_request(request_id))
    except ApiError as exc:
        logger.warning("Error fetching request %s: %s", request_id, exc)
        return RequestDetailPage(error="Failed to load request details.")


def load_reports(client: GearGuardClient, range_key: str = "30d") -> ReportsPage:
    if range_key not in REPORT_RANGES:
        range_key = "30d"
    try:
        report = client.report_summary(range_key)
    except ApiError as exc:
        logger.warning("Error fetching report summary: %s", exc)
        report = None
    if report and report.get("kpi", {}).get("total_requests"):
        return ReportsPage(range=range_key, report=report)
    logger.info("Using demo data for Reports")
    return ReportsPage(
        range=range_key,
        report=demo.demo_report(range_key),
        drill_down=demo.fresh(demo.DEMO_DRILL_DOWN),
        demo=True,
    )


def change_stage(client: GearGuardClient, request_id: str, stage: str, **extra) -> dict:
    """Move a request to ``stage``; unknown stages never reach the API."""

    if stage not in REQUEST_STAGES:
        raise ValueError(f"stage must be one of {', '.join(REQUEST_STAGES)}")
    return client.update_stage(request_id, stage, **extra)


def delete_request(client: GearGuardClient, request_id: str) -> None:
    client.delete_request(request_id)


def delete_user(client: GearGuardClient, user_id: str) -> None:
    client.delete_user(user_id)


def export_report(page: ReportsPage, path: str | Path | None = None) -> Path:
    """Write the report shown on ``page`` as JSON and return the file path."""

    target = Path(path) if path else Path(f"report_{page.range}.json")
    target.write_text(json.dumps(asdict(page), indent=2, default=str))
    return target
