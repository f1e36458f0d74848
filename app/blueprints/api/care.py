"""Care Feed API
================

Routes:
    GET /api/care?limit=&before=&type=   Newest-first care events across all plants

``limit`` is clamped to 1..100 (default 20). ``before`` is an event id
cursor: pass the last id of a page to get the next one.
"""

from __future__ import annotations

import logging

from flask import Blueprint, Response

from app.blueprints.api._common import get_care_service, parse_query, success
from app.schemas.care import CareFeedQuery
from app.utils.http import safe_route

logger = logging.getLogger(__name__)

care_api = Blueprint("care_api", __name__)


@care_api.get("")
@safe_route("Failed to list care events")
def list_all_care_events() -> Response:
    query = parse_query(CareFeedQuery)
    return success(get_care_service().feed(query))
