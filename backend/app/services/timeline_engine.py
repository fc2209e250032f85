"""
TimelineEngine — multi-phase renovation roadmap with calendar dates.

Covers:
  - Tier-based phase durations (five core phases + optional renovation prep)
  - Forward scheduling from a start date, backward scheduling from a move-in date
  - Task lists filtered by the selected services
  - Optional schedule compression for urgent projects
  - Phase state (active / urgent / overdue) against an injected "now"
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Dict, Iterable, List, Optional, Union

from app.config import (
    CORE_PHASES,
    PHASE_TEMPLATES,
    PHASE_URGENCY_WINDOW_DAYS,
    RENOVATION_PREP_WEEKS,
    TASK_DEFINITIONS,
    TIER_DURATIONS,
    URGENT_SCHEDULE_FACTOR,
    PricingTier,
)
from app.services.costing_engine import ServiceSelection, coerce_tier
from app.services.labels import LabelResolver, resolve_label

logger = logging.getLogger("design-dialogues.timeline")

DateLike = Union[date, datetime]


def start_of_day(value: DateLike) -> datetime:
    """Midnight of ``value``'s calendar day, keeping any tzinfo."""
    if isinstance(value, datetime):
        return value.replace(hour=0, minute=0, second=0, microsecond=0)
    return datetime.combine(value, time.min)


def format_date_range(start: datetime, end: datetime) -> str:
    """e.g. "Jan 07 - Jan 21"."""
    return f"{start.strftime('%b %d')} - {end.strftime('%b %d')}"


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------

@dataclass
class TimelineTask:
    id: str
    label: str
    button_variant: str = "outline"
    is_critical: bool = False
    requires_service: Optional[str] = None


@dataclass
class TimelinePhase:
    id: str
    title: str
    site_status: str
    week_start: int
    week_end: int
    start_date: datetime
    end_date: datetime
    date_range: str
    tasks: List[TimelineTask] = field(default_factory=list)

    @property
    def weeks(self) -> int:
        return self.week_end - self.week_start + 1


@dataclass
class TimelineCalculation:
    tier: PricingTier
    total_weeks: int
    start_date: datetime
    end_date: datetime
    anchor: str                      # "start" | "move_in"
    phases: List[TimelinePhase] = field(default_factory=list)


@dataclass
class PhaseState:
    phase_id: str
    is_active: bool
    is_urgent: bool

    @property
    def is_overdue(self) -> bool:
        """Urgent but no longer running: the phase end has passed."""
        return self.is_urgent and not self.is_active


# ---------------------------------------------------------------------------
# TimelineEngine
# ---------------------------------------------------------------------------

class TimelineEngine:
    """
    Timeline Scheduling Engine.

    ``duration_overrides`` replaces per-tier phase weeks for this instance,
    e.g. ``{"Premium": {"finishes": 8}}``.
    """

    def __init__(
        self,
        duration_overrides: Optional[Dict[str, Dict[str, int]]] = None,
        renovation_prep_weeks: int = RENOVATION_PREP_WEEKS,
        urgent_factor: float = URGENT_SCHEDULE_FACTOR,
    ) -> None:
        self.durations: Dict[PricingTier, Dict[str, int]] = {
            tier: dict(weeks) for tier, weeks in TIER_DURATIONS.items()
        }
        for tier, weeks in (duration_overrides or {}).items():
            self.durations[coerce_tier(tier)].update({k: int(v) for k, v in weeks.items()})
        self.renovation_prep_weeks = int(renovation_prep_weeks)
        self.urgent_factor = float(urgent_factor)

    # ------------------------------------------------------------------
    # 1. Durations
    # ------------------------------------------------------------------

    def phase_weeks(
        self, tier: PricingTier, is_renovation: bool, is_urgent: bool = False
    ) -> List[tuple]:
        """Ordered ``(template_key, weeks)`` pairs for the phases to schedule."""
        plan = []
        if is_renovation:
            plan.append(("renovation", self.renovation_prep_weeks))
        for key in CORE_PHASES:
            weeks = self.durations[tier].get(key, 0)
            if is_urgent and weeks > 0:
                weeks = max(1, int(math.floor(weeks * self.urgent_factor + 0.5)))
            plan.append((key, weeks))
        return plan

    def total_weeks(self, tier: Union[PricingTier, str], is_renovation: bool, is_urgent: bool = False) -> int:
        return sum(weeks for _, weeks in self.phase_weeks(coerce_tier(tier), is_renovation, is_urgent))

    # ------------------------------------------------------------------
    # 2. Schedule
    # ------------------------------------------------------------------

    def schedule(
        self,
        tier: Union[PricingTier, str],
        is_renovation: bool,
        services: ServiceSelection,
        *,
        start_date: Optional[DateLike] = None,
        move_in_date: Optional[DateLike] = None,
        is_urgent: bool = False,
        now: Optional[datetime] = None,
        label_resolver: Optional[LabelResolver] = None,
    ) -> TimelineCalculation:
        """
        Lay out the phases on the calendar.

        Exactly one anchor applies: ``move_in_date`` schedules backwards
        (start = move-in − total weeks), ``start_date`` schedules forwards,
        and with neither the project starts today (``now`` or the clock).
        Past move-in dates are accepted as-is.
        """
        if start_date is not None and move_in_date is not None:
            raise ValueError("Pass either start_date or move_in_date, not both")

        tier = coerce_tier(tier)
        resolve = label_resolver or resolve_label
        plan = self.phase_weeks(tier, is_renovation, is_urgent)
        total_weeks = sum(weeks for _, weeks in plan)

        if move_in_date is not None:
            anchor = "move_in"
            project_start = start_of_day(move_in_date) - timedelta(weeks=total_weeks)
        else:
            anchor = "start"
            project_start = start_of_day(start_date if start_date is not None else (now or datetime.now()))

        phases: List[TimelinePhase] = []
        current_week = 1
        for template_key, weeks in plan:
            phases.append(self._create_phase(
                template_key, current_week, current_week + weeks - 1, project_start, services, resolve,
            ))
            current_week += weeks

        logger.debug(
            "timeline scheduled",
            extra={"tier": tier.value, "total_weeks": total_weeks, "anchor": anchor},
        )

        return TimelineCalculation(
            tier=tier,
            total_weeks=total_weeks,
            start_date=project_start,
            end_date=project_start + timedelta(weeks=total_weeks),
            anchor=anchor,
            phases=phases,
        )

    def _create_phase(
        self,
        template_key: str,
        week_start: int,
        week_end: int,
        project_start: datetime,
        services: ServiceSelection,
        resolve: LabelResolver,
    ) -> TimelinePhase:
        template = PHASE_TEMPLATES[template_key]
        start = project_start + timedelta(weeks=week_start - 1)
        end = project_start + timedelta(weeks=week_end)
        return TimelinePhase(
            id=template["id"],
            title=resolve(template["title_key"]),
            site_status=resolve(template["site_status_key"]),
            week_start=week_start,
            week_end=week_end,
            start_date=start,
            end_date=end,
            date_range=format_date_range(start, end),
            tasks=resolve_tasks(template["tasks"], services, resolve),
        )


def resolve_tasks(
    task_ids: Iterable[str], services: ServiceSelection, resolve: LabelResolver = resolve_label
) -> List[TimelineTask]:
    """Tasks for ``task_ids``, dropping those whose required service is off."""
    tasks = []
    for task_id in task_ids:
        definition = TASK_DEFINITIONS[task_id]
        required = definition.get("requires_service")
        if required and not services.is_enabled(required):
            continue
        tasks.append(TimelineTask(
            id=task_id,
            label=resolve(f"timeline.tasks.{task_id}"),
            button_variant=definition.get("button_variant", "outline"),
            is_critical=bool(definition.get("is_critical", False)),
            requires_service=required,
        ))
    return tasks


# ---------------------------------------------------------------------------
# Phase state (a view over wall-clock time; recompute per render)
# ---------------------------------------------------------------------------

def phase_state(phase: TimelinePhase, now: datetime) -> PhaseState:
    return PhaseState(
        phase_id=phase.id,
        is_active=phase.start_date <= now <= phase.end_date,
        is_urgent=now >= phase.end_date - timedelta(days=PHASE_URGENCY_WINDOW_DAYS),
    )


def calculate_phase_states(phases: Iterable[TimelinePhase], now: datetime) -> Dict[str, PhaseState]:
    """Map phase id -> state at ``now``. ``now`` is always injected by the caller."""
    return {phase.id: phase_state(phase, now) for phase in phases}


def active_phase(phases: List[TimelinePhase], now: datetime) -> Optional[TimelinePhase]:
    """The first phase running at ``now``, else the first phase."""
    for phase in phases:
        if phase_state(phase, now).is_active:
            return phase
    return phases[0] if phases else None


def overdue_tasks(
    phases: Iterable[TimelinePhase], now: datetime, completed: Iterable[str] = ()
) -> List[TimelineTask]:
    """Incomplete tasks belonging to phases whose end has passed."""
    done = set(completed)
    result = []
    for phase in phases:
        if phase_state(phase, now).is_overdue:
            result.extend(task for task in phase.tasks if task.id not in done)
    return result


_default_engine = TimelineEngine()


def calculate_timeline(
    tier: Union[PricingTier, str],
    is_renovation: bool,
    services: ServiceSelection,
    *,
    start_date: Optional[DateLike] = None,
    move_in_date: Optional[DateLike] = None,
    is_urgent: bool = False,
    now: Optional[datetime] = None,
    label_resolver: Optional[LabelResolver] = None,
) -> TimelineCalculation:
    """Module-level shortcut using the default duration tables."""
    return _default_engine.schedule(
        tier, is_renovation, services,
        start_date=start_date, move_in_date=move_in_date, is_urgent=is_urgent,
        now=now, label_resolver=label_resolver,
    )
