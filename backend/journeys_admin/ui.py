"""
Journeys Admin Backend — Location Management Page

Server-rendered admin page:
    GET  /locations                  list of active locations
    GET  /locations?selected=<id>    same list with the detail modal open
    POST /locations/{id}/deactivate  "Set to Inactive", then back to the list
"""

from html import escape

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, RedirectResponse

from journeys_admin.config import generate_error_code, log, settings
from journeys_admin.graphql import GraphQLClient, GraphQLError, get_graphql_client
from journeys_admin.locations import LocationNotFoundError, deactivate_location, get_active_locations
from journeys_admin.models import Location
from journeys_admin.naming import hero_image_filename, stamp_filename

router = APIRouter(tags=["ui"])

PAGE_TITLE = "Location Management"

_STYLE = """
  body { font-family: system-ui, sans-serif; background: #f9fafb; color: #111827; margin: 0; }
  nav { background: #111827; color: #fff; padding: 12px 24px; font-weight: 600; }
  main { max-width: 1100px; margin: 0 auto; padding: 32px 16px; }
  .muted { color: #6b7280; }
  .error { color: #ef4444; text-align: center; }
  .empty { text-align: center; padding: 48px 0; }
  ul.locations { list-style: none; margin: 0 0 96px; padding: 0; background: #fff;
                 border-radius: 8px; box-shadow: 0 10px 30px rgba(0,0,0,.15); }
  ul.locations li { border-bottom: 1px solid #f3f4f6; }
  ul.locations a.row { display: flex; justify-content: space-between; gap: 24px; padding: 20px 24px;
                       color: inherit; text-decoration: none; }
  ul.locations a.row:hover { background: #f9fafb; }
  .hero-thumb { width: 80px; height: 48px; object-fit: cover; border-radius: 8px; background: #f3f4f6; }
  .stamp-thumb { width: 48px; height: 48px; object-fit: cover; border: 1px solid #e5e7eb; }
  .backdrop { position: fixed; inset: 0; background: rgba(107,114,128,.75); display: flex;
              align-items: center; justify-content: center; }
  .panel { background: #fff; border-radius: 8px; padding: 24px; width: 100%; max-width: 512px; }
  .panel img.hero { width: 100%; border-radius: 8px; background: #f3f4f6; }
  .divider { margin-top: 16px; border-top: 1px dashed #d4d4d4; padding-top: 8px; }
  .btn { display: inline-block; padding: 8px 16px; border-radius: 6px; font-weight: 600;
         cursor: pointer; text-decoration: none; border: 0; }
  .btn-danger { background: #dc2626; color: #fff; padding: 8px 32px; }
  .btn-plain { background: #fff; color: #111827; border: 1px solid #d1d5db; }
  .btn-primary { background: #2563eb; color: #fff; }
"""


def _hero_url(location: Location) -> str:
    return f"{settings.asset_base_url}/location_images/{location.hero_image or hero_image_filename(location.name)}"


def _stamp_url(location: Location) -> str:
    return f"{settings.asset_base_url}/stamps/{location.stamp_image or stamp_filename(location.name)}"


def _page(body_html: str) -> str:
    return f"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{PAGE_TITLE}</title>
  <style>{_STYLE}</style>
</head>
<body>
  <nav>Journeys Admin · {PAGE_TITLE}</nav>
  <main>
{body_html}
  </main>
</body>
</html>"""


def _render_row(location: Location) -> str:
    name = escape(location.name)
    return f"""
      <li>
        <a class="row" href="/locations?selected={escape(location.id)}">
          <div style="display:flex; gap:16px;">
            <img class="hero-thumb" alt="{name} hero image" src="{escape(_hero_url(location))}">
            <div>
              <p style="margin:0; font-weight:600;">{name}</p>
              <p class="muted" style="margin:4px 0 0; font-size:12px;">{escape(location.city or '')}, {escape(location.state or '')}</p>
            </div>
          </div>
          <img class="stamp-thumb" alt="{name} stamp" src="{escape(_stamp_url(location))}">
        </a>
      </li>"""


def _render_modal(location: Location) -> str:
    name = escape(location.name)
    stamp_url = escape(_stamp_url(location))
    stamp_name = (location.stamp_image or stamp_filename(location.name)).rsplit(".", 1)[0]
    return f"""
    <div class="backdrop">
      <div class="panel" role="dialog" aria-labelledby="location-title">
        <div style="display:flex; justify-content:space-between; align-items:center; margin-bottom:16px;">
          <h3 id="location-title" style="margin:0;">{name}</h3>
          <a href="/locations" class="muted" aria-label="Close">&#x2715;</a>
        </div>
        <img class="hero" alt="{name} hero image" src="{escape(_hero_url(location))}">
        <div style="display:flex; justify-content:space-between; align-items:center; margin-top:16px;">
          <div>
            <p class="muted" style="margin:0; font-size:14px;">Location</p>
            <p style="margin:0; font-size:18px; font-weight:500;">{escape(location.city or '')}, {escape(location.state or '')}</p>
          </div>
          <div>
            <p class="muted" style="margin:0 0 4px; font-size:14px;">Stamp</p>
            <a href="{stamp_url}" target="_blank" rel="noopener">
              <img class="stamp-thumb" style="width:64px; height:64px;" alt="{name} stamp" src="{stamp_url}">
            </a>
          </div>
        </div>
        <div class="divider">
          <p class="muted" style="margin:0; font-size:14px;">Stamp Image Name</p>
          <p style="margin:0; font-size:18px; font-weight:500;">{escape(stamp_name)}</p>
        </div>
        <div class="divider">
          <form method="post" action="/locations/{escape(location.id)}/deactivate">
            <button type="submit" class="btn btn-danger">Set to Inactive</button>
          </form>
        </div>
        <div style="margin-top:24px; text-align:right;">
          <a href="/locations" class="btn btn-plain">Close</a>
        </div>
      </div>
    </div>"""


def render_locations_page(locations: list[Location], selected_id: str | None = None) -> str:
    header = f"""
    <div style="margin-bottom:24px;">
      <h1 style="margin:0; font-size:24px;">{PAGE_TITLE}</h1>
      <p class="muted">Manage all active locations</p>
    </div>"""

    if locations:
        rows = "".join(_render_row(location) for location in locations)
        listing = f'\n    <ul class="locations">{rows}\n    </ul>'
    else:
        listing = """
    <div class="empty">
      <p class="muted">No active locations found</p>
      <a class="btn btn-primary" href="/locations?refresh=true">Refresh</a>
    </div>"""

    selected = next((loc for loc in locations if loc.id == selected_id), None) if selected_id else None
    modal = _render_modal(selected) if selected else ""
    return _page(header + listing + modal)


def render_error_page(message: str) -> str:
    return _page(f'    <p class="error">Error loading locations: {escape(message)}</p>')


@router.get("/locations", response_class=HTMLResponse)
async def locations_page(
    selected: str | None = None,
    refresh: bool = False,
    client: GraphQLClient = Depends(get_graphql_client),
) -> HTMLResponse:
    try:
        locations = await get_active_locations(client, refresh=refresh)
    except GraphQLError as e:
        code = generate_error_code()
        log("ERROR", "locations page load failed", error=str(e), error_code=code)
        return HTMLResponse(render_error_page(str(e)), status_code=500)

    return HTMLResponse(render_locations_page(locations, selected_id=selected))


@router.post("/locations/{location_id}/deactivate")
async def deactivate_from_page(
    location_id: str,
    client: GraphQLClient = Depends(get_graphql_client),
):
    """Form target for "Set to Inactive". Redirects back to the list, which refetches."""
    try:
        await deactivate_location(client, location_id)
    except LocationNotFoundError:
        log("WARN", "deactivate target missing", location_id=location_id)
    except GraphQLError as e:
        code = generate_error_code()
        log("ERROR", "deactivate from page failed", location_id=location_id, error=str(e), error_code=code)
        return HTMLResponse(render_error_page(str(e)), status_code=500)

    return RedirectResponse(url="/locations", status_code=303)
