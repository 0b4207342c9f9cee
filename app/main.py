"""
Streamlit Frontend for Expense Tracker

Single screen with two views:
1. List - running total, record count, add form, one card per expense
   with a delete button
2. Top category - the category with the highest summed spending

The screen owns an ExpenseSession (kept in st.session_state) and only
talks to the expense core through it.
"""

import streamlit as st

from expense_tracker.audit import configure_logging
from expense_tracker.config import get_settings
from expense_tracker.orchestrator import ExpenseSession, View, create_app_components
from expense_tracker.queries import format_amount


settings = get_settings().app

# Page configuration
st.set_page_config(
    page_title=settings.app_title,
    page_icon="💰",
    layout="centered",
)


def get_session() -> ExpenseSession:
    """Get or create this browser session's expense state."""
    if "expense_session" not in st.session_state:
        configure_logging(settings.debug_mode)
        try:
            _, session = create_app_components(use_storage=True)
        except Exception as e:
            st.error(f"Failed to initialize storage: {e}")
            _, session = create_app_components(use_storage=False)
        st.session_state.expense_session = session
    return st.session_state.expense_session


def money(amount) -> str:
    return f"{settings.currency_symbol} {format_amount(amount)}"


def main():
    """Main application entry point."""
    session = get_session()

    st.sidebar.title(f"💰 {settings.app_title}")
    labels = {
        View.LIST: "📋 Gastos",
        View.TOP_CATEGORY: "🏆 Maior categoria",
    }
    choice = st.sidebar.radio(
        "Navegar:",
        list(labels),
        format_func=lambda v: labels[v],
        index=list(labels).index(session.view),
    )
    session.show(choice)

    if session.view == View.TOP_CATEGORY:
        render_top_category_page(session)
    else:
        render_list_page(session)


def render_list_page(session: ExpenseSession):
    """Render the expense list with the running total."""
    st.title(f"💰 {settings.app_title}")

    col1, col2 = st.columns(2)
    col1.metric("Total", money(session.total))
    col2.metric("Gastos registrados", session.count)

    with st.expander("➕ Adicionar Novo Gasto"):
        render_add_form(session)

    st.markdown("---")

    if not session.records:
        st.info("Nenhum gasto registrado.")
        return

    for record in session.records:
        with st.container(border=True):
            left, right = st.columns([3, 1])
            with left:
                st.markdown(f"**{record.description}**")
                st.caption(f"{record.category} · {record.date}")
            with right:
                st.markdown(f"**{money(record.amount)}**")
                if st.button("🗑️ Excluir", key=f"delete-{record.id}"):
                    session.remove(record.id)
                    st.rerun()


def render_add_form(session: ExpenseSession):
    """Render the add-expense form."""
    with st.form("add_expense", clear_on_submit=True):
        amount = st.text_input(f"Valor ({settings.currency_symbol})")
        category = st.selectbox(
            "Categoria",
            settings.categories_list,
            index=None,
            placeholder="Escolha uma categoria",
        )
        description = st.text_input("Descrição")
        submitted = st.form_submit_button("Adicionar", type="primary")

    if submitted:
        record = session.add(amount, category, description)
        if record is None:
            # The form has already been cleared; say why nothing was added
            for issue in session.last_validation.issues:
                st.warning(issue.message)
        else:
            st.rerun()


def render_top_category_page(session: ExpenseSession):
    """Render the top-spending category."""
    st.title("🏆 Maior categoria")

    top = session.top_category
    if top is None:
        st.info("Nenhum gasto registrado.")
        return

    st.metric(top.category, money(top.amount))
    st.caption(f"Total geral: {money(session.total)}")


if __name__ == "__main__":
    main()
