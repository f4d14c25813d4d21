"""Workflow states as board columns."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from teamboard.models import TeamId, WorkflowDetail, WorkflowState
    from teamboard.remote import RemoteBoardAPI

logger = logging.getLogger(__name__)


def _display_rank(state: WorkflowState) -> int:
    if state.is_initial:
        return 0
    if state.is_final:
        return 2
    return 1


def order_states(states: Iterable[WorkflowState]) -> list[WorkflowState]:
    """Sort states for display: initial first, final last, the rest in fetch order.

    A state flagged both initial and final sorts first.
    """
    ordered = sorted(states, key=_display_rank)
    initial_count = sum(1 for state in ordered if state.is_initial)
    if initial_count > 1:
        logger.warning(
            "Workflow has %d initial states: %s",
            initial_count,
            [state.id for state in ordered if state.is_initial],
        )
    return ordered


async def load_workflow(api: RemoteBoardAPI, team_id: TeamId) -> WorkflowDetail | None:
    """Fetch the team's workflow. ``None`` means the board has no columns."""
    workflow = await api.fetch_workflow_for_team(team_id)
    if workflow is None:
        logger.info("No workflow configured for team %s", team_id)
        return None
    return workflow.model_copy(update={"states": order_states(workflow.states)})
