"""
Branch nodes - one per intent, run concurrently.

Each branch processes its own group in order and returns exactly one
ActionResult per email it started.
"""

import logging
from collections.abc import Callable

from langchain_core.runnables import RunnableConfig

from inbox_triage.agent.state import PipelineState, deadline_passed, get_services
from inbox_triage.models import Intent
from inbox_triage.retry import run_deadline

logger = logging.getLogger(__name__)


def branch_node_name(intent: Intent) -> str:
    """Graph node name for an intent's branch."""
    return f"{intent.value}_branch"


def make_branch_node(intent: Intent) -> Callable[[PipelineState, RunnableConfig], dict]:
    """
    Build the graph node that runs the handler for `intent`.

    Args:
        intent: Intent whose group the node processes.

    Returns:
        Node function returning updated fields: results, timed_out.
    """

    def branch_node(state: PipelineState, config: RunnableConfig) -> dict:
        group = state.get("groups", {}).get(intent, [])
        if not group:
            return {"results": []}

        handler = get_services(config).handlers.for_intent(intent)
        logger.info(f"{intent.value} branch: handling {len(group)} email(s)")

        deadline = state.get("deadline")
        results = []

        with run_deadline(deadline):
            for item in group:
                if deadline_passed(deadline):
                    logger.warning(
                        f"{intent.value} branch: deadline reached, "
                        f"{len(group) - len(results)} email(s) left unprocessed"
                    )
                    return {"results": results, "timed_out": True}

                result = handler(item)
                if result.success:
                    logger.info(f"{item.email.message_id}: {result.action}")
                else:
                    logger.warning(f"{item.email.message_id}: {result.action} ({result.error})")
                results.append(result)

        return {"results": results}

    branch_node.__name__ = branch_node_name(intent)
    return branch_node
