"""
Opportunity Sizer

Computes the total addressable worksite-employee (WSE) count.
"""

from ..coercion import non_negative
from ..models import InputMode, OpportunityInputs, OpportunitySizing


class OpportunitySizer:
    """Sizes total WSE from whichever input mode is active."""

    def calculate(self, opportunity: OpportunityInputs) -> OpportunitySizing:
        """
        By clients: total WSE = clients × avg WSE per client
        By WSE:     total WSE = total WSE entered directly

        The inactive mode's fields are ignored but never cleared.
        """
        if opportunity.mode == InputMode.BY_WSE:
            total_wse = non_negative(opportunity.total_wse_direct)
        else:
            total_wse = non_negative(opportunity.clients) * non_negative(opportunity.avg_wse_per_client)

        return OpportunitySizing(mode=opportunity.mode, total_wse=total_wse)
