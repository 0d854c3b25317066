"""Terminal front end for the GearGuard pages."""

# purpose: render dashboard, kanban, equipment, user, admin and report views as text
# depends_on: gearguard.client.pages

from __future__ import annotations

import logging
from typing import Optional

import typer

from ..client import pages, views
from ..schemas import USER_ROLES
from ..client.api import ApiError, GearGuardClient

app = typer.Typer(help="GearGuard maintenance console")


def build_client(api_url: Optional[str]) -> GearGuardClient:
    return GearGuardClient(base_url=api_url)


def _client(ctx: typer.Context) -> GearGuardClient:
    return ctx.obj["client"]


def _table(headers: list[str], rows: list[list[object]]) -> None:
    cells = [[str(c) for c in row] for row in rows]
    widths = [max([len(h)] + [len(r[i]) for r in cells]) for i, h in enumerate(headers)]
    typer.echo("  ".join(h.ljust(w) for h, w in zip(headers, widths)))
    typer.echo("  ".join("-" * w for w in widths))
    for row in cells:
        typer.echo("  ".join(c.ljust(w) for c, w in zip(row, widths)))


def _demo_banner(is_demo: bool) -> None:
    if is_demo:
        typer.echo("[demo data]")


@app.callback()
def main(
    ctx: typer.Context,
    api_url: Optional[str] = typer.Option(None, "--api-url", envvar="GEARGUARD_API_URL", help="Base URL of the API"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    logging.basicConfig(level=logging.INFO if verbose else logging.WARNING)
    ctx.obj = {"client": build_client(api_url)}


@app.command()
def dashboard(ctx: typer.Context) -> None:
    """Headline request and equipment counts."""
    page = pages.load_dashboard(_client(ctx))
    _demo_banner(page.demo)
    _table(
        ["Total Requests", "New", "In Progress", "Equipment"],
        [[page.total_requests, page.new_requests, page.in_progress_requests, page.total_equipment]],
    )


@app.command()
def kanban(ctx: typer.Context) -> None:
    """Requests grouped by stage."""
    page = pages.load_kanban(_client(ctx))
    _demo_banner(page.demo)
    for column in page.columns:
        typer.echo(f"\n{column.title} ({column.count})")
        for r in column.requests:
            assignee = views.name_of(r.get("assignee"), "Unassigned")
            typer.echo(f"  [{r.get('priority', '-')}] {r['subject']} - {views.name_of(r.get('equipment'))} - {assignee}")


@app.command()
def equipment(
    ctx: typer.Context,
    search: str = typer.Option("", "--search", "-s", help="Name or serial substring"),
) -> None:
    """Equipment inventory."""
    page = pages.load_equipment_list(_client(ctx), search)
    _demo_banner(page.demo)
    if not page.visible:
        typer.echo("No equipment found matching your search.")
        return
    _table(
        ["Name", "Serial", "Type", "Location", "Status", "Dept"],
        [
            [
                e["name"],
                e.get("serial_number", ""),
                e.get("type") or "",
                e.get("location") or "",
                views.STATUS_LABELS.get(e.get("status"), e.get("status")),
                views.name_of(e.get("department")),
            ]
            for e in page.visible
        ],
    )


@app.command()
def users(
    ctx: typer.Context,
    role: str = typer.Option("all", "--role", help="all, " + ", ".join(USER_ROLES)),
    department: Optional[str] = typer.Option(None, "--department", help="Department id or name"),
) -> None:
    """System users, optionally filtered."""
    if role != "all" and role not in USER_ROLES:
        raise typer.BadParameter(f"expected all or one of {', '.join(USER_ROLES)}", param_hint="--role")
    page = pages.load_user_management(_client(ctx), role=role, department=department)
    if page.error:
        typer.echo(page.error, err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Total Users: {len(page.users)}  Showing: {len(page.visible)}")
    _table(
        ["Name", "Email", "Role", "Dept"],
        [
            [u["name"], u["email"], views.ROLE_LABELS.get(u.get("role"), "Employee"), views.name_of(u.get("department"))]
            for u in page.visible
        ],
    )


@app.command()
def admin(
    ctx: typer.Context,
    flt: str = typer.Option("all", "--filter", help="all, new, in_progress or critical"),
) -> None:
    """Administrator overview."""
    page = pages.load_admin_overview(_client(ctx), flt)
    _demo_banner(page.demo)
    counts = page.stats["counts"]
    _table(
        ["Total Users", "Technicians", "Active Equipment", "Open Requests"],
        [[counts["total_users"], counts["technicians"], counts["active_equipment"], counts["open_requests"]]],
    )
    typer.echo("")
    _table(["Stage", "Requests"], [list(bar) for bar in page.status_chart])
    typer.echo("")
    if not page.visible_requests:
        typer.echo("No requests found for this filter.")
        return
    _table(
        ["Subject", "Equipment", "Tech", "Status"],
        [
            [r["subject"], views.name_of(r.get("equipment")), views.name_of(r.get("assignee"), "Unassigned"), r["stage"]]
            for r in page.visible_requests
        ],
    )


@app.command()
def request(ctx: typer.Context, request_id: str) -> None:
    """Show one maintenance request."""
    page = pages.load_request_detail(_client(ctx), request_id)
    if page.error:
        typer.echo(page.error, err=True)
        raise typer.Exit(code=1)
    r = page.request
    typer.echo(f"{r['subject']}  [{views.STAGE_LABELS.get(r['stage'], r['stage'])}] priority={r['priority']} type={r['type']}")
    typer.echo(f"Equipment: {views.name_of(r.get('equipment'))}")
    typer.echo(f"Assigned:  {views.name_of(r.get('assignee'), 'Unassigned')}")
    if r.get("scheduled_date"):
        typer.echo(f"Scheduled: {r['scheduled_date']}")
    if r.get("duration") is not None:
        typer.echo(f"Hours:     {r['duration']}")
    if r.get("scrap_reason"):
        typer.echo(f"Scrapped:  {r['scrap_reason']}")
    if r.get("description"):
        typer.echo(f"\n{r['description']}")


@app.command()
def stage(ctx: typer.Context, request_id: str, new_stage: str) -> None:
    """Move a request to another stage."""
    try:
        updated = pages.change_stage(_client(ctx), request_id, new_stage)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="NEW_STAGE")
    except ApiError as exc:
        typer.echo(f"Failed to update stage: {exc.message}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"{updated['subject']} -> {updated['stage']}")


@app.command()
def delete(
    ctx: typer.Context,
    kind: str = typer.Argument(..., help="request or user"),
    record_id: str = typer.Argument(...),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a request or a user."""
    removers = {"request": pages.delete_request, "user": pages.delete_user}
    if kind not in removers:
        raise typer.BadParameter("expected 'request' or 'user'", param_hint="KIND")
    if not yes and not typer.confirm(f"Are you sure you want to delete this {kind}?"):
        raise typer.Abort()
    try:
        removers[kind](_client(ctx), record_id)
    except ApiError as exc:
        typer.echo(f"Failed to delete {kind}: {exc.message}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Deleted {kind} {record_id}")


@app.command()
def reports(
    ctx: typer.Context,
    range_key: str = typer.Option("30d", "--range", help="7d, 30d or 1y"),
    fault: Optional[str] = typer.Option(None, "--fault", help="Drill into a fault type"),
    export: Optional[str] = typer.Option(None, "--export", help="Write the report as JSON"),
) -> None:
    """Maintenance KPIs for a trailing window."""
    page = pages.load_reports(_client(ctx), range_key)
    _demo_banner(page.demo)
    kpi = page.report["kpi"]
    _table(list(kpi), [list(kpi.values())])
    teams = page.report.get("requests_by_team", [])
    if teams:
        typer.echo("")
        _table(["Team", "Completed", "Open"], [[t["name"], t["completed"], t["open"]] for t in teams])
    if fault:
        rows = page.drill_down.get(fault, [])
        typer.echo(f"\n{fault} faults")
        _table(["Equipment", "Issue", "Cost"], [[d["equipment"], d["issue"], d["cost"]] for d in rows])
    if export:
        path = pages.export_report(page, export)
        typer.echo(f"Report written to {path}")


if __name__ == "__main__":
    app()
