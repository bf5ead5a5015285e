"""Financial statements table rendering.

Collapsible wide table: one row per line item, one column per report period.
"""

import streamlit as st

from src.analysis.statement_formatter import LINE_ITEMS_COLUMN
from src.app.logic.financials import FinancialsTableContext


def render_financials_table(context: FinancialsTableContext | None) -> None:
    """Render the statement table inside a collapsed expander.

    Args:
        context: Prepared table context; None renders nothing
    """
    if context is None:
        return

    column_config = {
        LINE_ITEMS_COLUMN: st.column_config.TextColumn(LINE_ITEMS_COLUMN, width="large"),
    }
    with st.expander(context.retrieved_label, expanded=False):
        st.dataframe(
            context.table.frame,
            hide_index=True,
            use_container_width=True,
            column_config=column_config,
        )
