"""HTML rendering of Jira ticket summaries for the PR description.

Values are substituted as-is. Ticket data comes from the Jira instance and is
not escaped here.
"""

from __future__ import annotations

from typing import Sequence

from schemas.ticket import TicketDetails


def render_ticket(details: TicketDetails) -> str:
    display_key = details.key.upper()
    return f"""<table><tbody><tr><td>
  <a href="{details.url}" title="{display_key}" target="_blank"><img alt="{details.type.name}" src="{details.type.icon}" /> {display_key}</a>
  {details.summary}
</td></tr></tbody></table>"""


def _render_row(details: TicketDetails) -> str:
    display_key = details.key.upper()
    return f"""<tr><td>
    <a href="{details.url}" title="{display_key}" target="_blank"><img alt="{details.type.name}" src="{details.type.icon}" /> {display_key}</a>
    {details.summary}
  </td></tr>"""


def render_tickets(details_list: Sequence[TicketDetails]) -> str:
    if not details_list:
        return ""
    if len(details_list) == 1:
        return render_ticket(details_list[0])

    rows = "\n".join(_render_row(details) for details in details_list)
    return f"<table><tbody>\n{rows}\n</tbody></table>"
