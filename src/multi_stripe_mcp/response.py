"""Format dispatcher outcomes into a single MCP text content block."""

import json
from collections.abc import Sequence
from typing import Any

from mcp.types import TextContent

from multi_stripe_mcp.dispatcher import AccountOutcome

NO_ACCOUNTS_MESSAGE = "No registered Stripe accounts were found."


def outcome_payload(outcome: AccountOutcome) -> dict[str, Any]:
    """Serializable view of one outcome; empty optional fields are left out."""
    payload: dict[str, Any] = {}
    if outcome.data is not None:
        payload["data"] = outcome.data
    payload["success"] = outcome.success
    payload["message"] = outcome.message
    if outcome.has_more:
        payload["has_more"] = outcome.has_more
    if outcome.next_page:
        payload["next_page"] = outcome.next_page
    return payload


def format_response(outcomes: Sequence[AccountOutcome]) -> list[TextContent]:
    """Serialize outcomes into one text block holding a JSON object keyed by account.

    Keys follow the order of ``outcomes``. A repeated account name keeps its
    first position but takes the later outcome's value.
    """
    if not outcomes:
        return [TextContent(type="text", text=NO_ACCOUNTS_MESSAGE)]

    by_account: dict[str, dict[str, Any]] = {}
    for outcome in outcomes:
        by_account[outcome.account_name] = outcome_payload(outcome)

    return [TextContent(type="text", text=json.dumps(by_account, ensure_ascii=False, default=str))]
