# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Proxy route table: every backend resource the browser may reach."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel
from werkzeug.datastructures import MultiDict

from armorup.interfaces.http.dto.encouragement import StruggleLogDTO

Target = tuple[str, dict[str, str]]
TargetResolver = Callable[[Mapping[str, Any], MultiDict], Target]


@dataclass(frozen=True, slots=True)
class ProxyRoute:
    rule: str
    methods: tuple[str, ...]
    upstream: str = ""
    defaults: Mapping[str, str] = field(default_factory=dict)
    resolve: TargetResolver | None = None
    body_model: type[BaseModel] | None = None
    body_error: str = "Invalid request body"

    def target(self, view_args: Mapping[str, Any], args: MultiDict) -> Target:
        if self.resolve is not None:
            return self.resolve(view_args, args)
        params = dict(self.defaults)
        params.update(args.to_dict())
        return self.upstream.format(**view_args), params


@dataclass(frozen=True, slots=True)
class ProxyResource:
    name: str
    prefix: str
    routes: tuple[ProxyRoute, ...]
    feature: str | None = None

    @property
    def feature_gated(self) -> bool:
        return self.feature is not None


def resolve_mood_listing(_: Mapping[str, Any], args: MultiDict) -> Target:
    if "start_date" in args and "end_date" in args:
        return "/api/mood/range", {
            "start_date": args["start_date"],
            "end_date": args["end_date"],
        }
    if "recent" in args:
        return "/api/mood/recent", {"limit": args.get("limit") or "7"}
    if "trends" in args:
        return "/api/mood/trends", {"days": args.get("days") or "30"}
    if "today" in args:
        return "/api/mood/today", {}
    return "/api/mood", {}


USERS = ProxyResource(
    name="users",
    prefix="/api/users",
    routes=(ProxyRoute("/me", ("GET",), "/api/users/me"),),
)

PRAYER = ProxyResource(
    name="prayer",
    prefix="/api/prayer",
    routes=(
        ProxyRoute("", ("GET", "POST"), "/api/prayer"),
        ProxyRoute("/my-prayers", ("GET",), "/api/prayer/my-prayers"),
        ProxyRoute("/my-requests", ("GET",), "/api/prayer/my-requests"),
        ProxyRoute("/answered", ("GET",), "/api/prayer/answered"),
        ProxyRoute("/<int:prayer_id>", ("GET", "PUT", "DELETE"), "/api/prayer/{prayer_id}"),
        ProxyRoute("/<int:prayer_id>/pray", ("POST",), "/api/prayer/{prayer_id}/pray"),
        ProxyRoute("/<int:prayer_id>/answer", ("POST",), "/api/prayer/{prayer_id}/answer"),
    ),
)

PRAYER_CHAINS = ProxyResource(
    name="prayer_chains",
    prefix="/api/prayer-chains",
    routes=(
        ProxyRoute("", ("GET", "POST"), "/api/prayer-chains"),
        ProxyRoute("/my-chains", ("GET",), "/api/prayer-chains/my-chains"),
        ProxyRoute("/commit", ("POST",), "/api/prayer-chains/commit"),
        ProxyRoute("/<int:chain_id>", ("GET", "PUT", "DELETE"), "/api/prayer-chains/{chain_id}"),
        ProxyRoute("/<int:chain_id>/join", ("POST",), "/api/prayer-chains/{chain_id}/join"),
        ProxyRoute("/<int:chain_id>/leave", ("POST",), "/api/prayer-chains/{chain_id}/leave"),
        ProxyRoute(
            "/<int:chain_id>/commit/<int:user_id>",
            ("DELETE",),
            "/api/prayer-chains/{chain_id}/commit/{user_id}",
        ),
    ),
)

GRATITUDE = ProxyResource(
    name="gratitude",
    prefix="/api/gratitude",
    routes=(
        ProxyRoute("", ("GET", "POST"), "/api/gratitude"),
        ProxyRoute("/recent", ("GET",), "/api/gratitude/recent", defaults={"limit": "7"}),
        ProxyRoute("/<int:entry_id>", ("GET", "PUT", "DELETE"), "/api/gratitude/{entry_id}"),
    ),
)

MOOD = ProxyResource(
    name="mood",
    prefix="/api/mood",
    routes=(
        ProxyRoute("", ("GET",), resolve=resolve_mood_listing),
        ProxyRoute("", ("POST",), "/api/mood"),
        ProxyRoute("/<int:entry_id>", ("GET", "PUT", "DELETE"), "/api/mood/{entry_id}"),
    ),
)

JOURNAL = ProxyResource(
    name="journal",
    prefix="/api/journal",
    routes=(
        ProxyRoute("", ("GET", "POST"), "/api/journal"),
        ProxyRoute("/<int:entry_id>", ("GET", "PUT", "DELETE"), "/api/journal/{entry_id}"),
    ),
)

ENCOURAGEMENT = ProxyResource(
    name="encouragement",
    prefix="/api/encourage",
    routes=(
        ProxyRoute("", ("GET", "POST"), "/api/encourage"),
        ProxyRoute(
            "/log-struggle",
            ("POST",),
            "/api/encourage/log-struggle",
            body_model=StruggleLogDTO,
            body_error="Struggle and message are required",
        ),
        ProxyRoute("/<int:log_id>", ("GET", "PUT", "DELETE"), "/api/encourage/{log_id}"),
    ),
)

AI = ProxyResource(
    name="ai",
    prefix="/api/ai",
    routes=(ProxyRoute("/encourage", ("POST",), "/api/ai/encourage"),),
)

INSIGHTS = ProxyResource(
    name="insights",
    prefix="/api/insights",
    feature="Insights",
    routes=(
        ProxyRoute("", ("GET",), "/api/insights"),
        ProxyRoute("", ("POST",), "/api/insights/generate"),
        ProxyRoute("/periods", ("GET",), "/api/insights/periods"),
        ProxyRoute("/period", ("GET",), "/api/insights/period"),
    ),
)

RESOURCES: tuple[ProxyResource, ...] = (
    USERS,
    PRAYER,
    PRAYER_CHAINS,
    GRATITUDE,
    MOOD,
    JOURNAL,
    ENCOURAGEMENT,
    AI,
    INSIGHTS,
)

__all__ = [
    "RESOURCES",
    "ProxyResource",
    "ProxyRoute",
    "resolve_mood_listing",
]
