"""
Streamlit Frontend for Personal Accountant

A thin consumer of the transaction store. It renders store state,
collects input through the validator and calls store operations.

DESIGN PRINCIPLES:
1. No business logic here - totals, filters and exports come from the core
2. Every mutation goes through the store
3. Errors from saving are shown, never swallowed
4. Display concerns (colours, currency formatting) live only here
"""

from datetime import date, datetime
from itertools import cycle

import streamlit as st

from accountant.export import CSV_CONTENT_TYPE, EXPORT_FILENAME, export_csv
from accountant.models import (
    CategorySummary,
    Transaction,
    TransactionType,
    default_category,
    suggested_categories,
)
from accountant.queries import TransactionFilter, TypeFilter
from accountant.services.storage import LoadStatus, PersistenceError
from accountant.store import TransactionStore, create_store
from accountant.utils import format_currency
from accountant.validation import TransactionValidationError, TransactionValidator


# Colour cycle for category breakdowns (Streamlit markdown colour names)
CATEGORY_PALETTE = ["blue", "green", "orange", "red", "violet", "gray"]


# Page configuration
st.set_page_config(
    page_title="Personal Accountant",
    page_icon="💰",
    layout="wide",
    initial_sidebar_state="expanded",
)


@st.cache_resource
def get_store() -> TransactionStore:
    """Get or create the shared transaction store (cached)."""
    return create_store()


def assign_colors(summaries: list[CategorySummary]) -> list[tuple[CategorySummary, str]]:
    """Pair each category with a palette colour in display order."""
    return list(zip(summaries, cycle(CATEGORY_PALETTE)))


def transaction_rows(transactions: list[Transaction]) -> list[dict]:
    """Convert transactions to table rows for display."""
    return [
        {
            "Date": t.local_date.strftime("%d %b %Y"),
            "Name": t.description,
            "Category": t.category,
            "Type": t.type.value,
            "Amount": format_currency(t.amount),
        }
        for t in transactions
    ]


def show_flash():
    """Show messages left by the previous run, then forget them."""
    flash = st.session_state.pop("flash", None)
    if not flash:
        return
    st.success(flash["success"])
    for message in flash["warnings"]:
        st.warning(message)


def main():
    """Main application entry point."""
    store = get_store()

    if store.load_status == LoadStatus.CORRUPT:
        st.warning(
            "Saved transactions could not be read and were not loaded. "
            "The file is left untouched until you make a change."
        )

    show_flash()

    st.sidebar.title("💰 Personal Accountant")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["📋 Transactions", "📈 Summary", "📊 Reports"],
        index=0,
    )

    if page == "📋 Transactions":
        render_transactions_page(store)
    elif page == "📈 Summary":
        render_summary_page(store)
    elif page == "📊 Reports":
        render_reports_page(store)


def render_transaction_form(store: TransactionStore, editing: Transaction = None):
    """Render the add/edit form."""
    validator = TransactionValidator()
    prefix = f"edit_{editing.id}" if editing else "add"

    transaction_type = st.radio(
        "Type",
        list(TransactionType),
        index=list(TransactionType).index(editing.type) if editing else 1,
        format_func=lambda t: t.value,
        horizontal=True,
        key=f"{prefix}_type",
    )

    categories = list(suggested_categories(transaction_type))
    current = editing.category if editing else default_category(transaction_type)
    if current not in categories:
        categories.append(current)

    with st.form(f"{prefix}_form", clear_on_submit=editing is None):
        amount = st.text_input("Amount", value=str(editing.amount) if editing else "")
        description = st.text_input("Description", value=editing.description if editing else "")
        category = st.selectbox("Category", categories, index=categories.index(current))
        day = st.date_input("Date", value=editing.local_date.date() if editing else date.today())
        submitted = st.form_submit_button("💾 Save", type="primary")

    if not submitted:
        return

    when = datetime.combine(day, editing.local_date.time() if editing else datetime.now().time())
    try:
        transaction, result = validator.build_with_result(
            amount,
            description,
            category,
            transaction_type,
            when=when,
            transaction_id=editing.id if editing else None,
        )
    except TransactionValidationError as e:
        for issue in e.result.errors:
            st.error(issue.message)
        return

    try:
        if editing:
            if not store.update(transaction):
                st.error("This transaction no longer exists.")
                return
        else:
            store.add(transaction)
    except PersistenceError as e:
        st.error(f"Could not save: {e}")
        return

    # Shown by show_flash() after the rerun
    st.session_state.flash = {
        "success": "Saved.",
        "warnings": [issue.message for issue in result.warnings],
    }
    st.rerun()


def render_transactions_page(store: TransactionStore):
    """Render the filterable transaction list."""
    st.title("📋 Transactions")

    with st.expander("➕ Add transaction"):
        render_transaction_form(store)

    if store.is_empty:
        st.info("No transactions yet. Add your first one above.")
        return

    if "filter" not in st.session_state:
        st.session_state.filter = TransactionFilter()
    current: TransactionFilter = st.session_state.filter
    all_transactions = store.transactions

    col1, col2 = st.columns(2)
    with col1:
        type_filter = st.selectbox(
            "Type",
            list(TypeFilter),
            index=list(TypeFilter).index(current.type_filter),
            format_func=lambda f: f.value.title(),
        )
    if type_filter != current.type_filter:
        current = current.with_type(type_filter, all_transactions)
    else:
        current = current.normalized(all_transactions)

    choices = current.available_categories(all_transactions)
    with col2:
        category = st.selectbox("Category", choices, index=choices.index(current.category))
    current = current.with_category(category)
    st.session_state.filter = current

    visible = current.apply(all_transactions)
    st.dataframe(transaction_rows(visible), use_container_width=True, hide_index=True)

    st.download_button(
        "⬇️ Export CSV",
        data=export_csv(visible).encode("utf-8"),
        file_name=EXPORT_FILENAME,
        mime=CSV_CONTENT_TYPE,
    )

    labels = [
        f"{t.local_date:%d %b %Y} · {t.description} · {format_currency(t.amount)}"
        for t in visible
    ]

    st.markdown("### ✏️ Edit")
    edit_index = st.selectbox(
        "Transaction",
        range(len(visible)),
        format_func=lambda i: labels[i],
        index=None,
        key="edit_choice",
    )
    if edit_index is not None:
        render_transaction_form(store, editing=visible[edit_index])

    st.markdown("### 🗑️ Delete")
    selected = st.multiselect(
        "Transactions to delete",
        range(len(visible)),
        format_func=lambda i: labels[i],
    )
    col1, col2 = st.columns(2)
    with col1:
        if st.button("Delete selected", disabled=not selected):
            try:
                removed = store.delete_at(selected, ordering=visible)
            except PersistenceError as e:
                st.error(f"Could not delete: {e}")
            else:
                st.success(f"Deleted {removed} transaction(s).")
                st.rerun()
    with col2:
        confirm = st.checkbox("I want to delete ALL transactions")
        if st.button("Clear all", disabled=not confirm):
            try:
                store.clear()
            except PersistenceError as e:
                st.error(f"Could not clear: {e}")
            else:
                st.rerun()


def render_summary_page(store: TransactionStore):
    """Render balance, totals and recent transactions."""
    st.title("📈 Summary")

    st.metric("Balance", format_currency(store.balance()))
    col1, col2 = st.columns(2)
    col1.metric("Income", format_currency(store.total_income()))
    col2.metric("Expense", format_currency(store.total_expense()))

    st.markdown("### Recent Transactions")
    recent = store.recent()
    if recent:
        st.dataframe(transaction_rows(recent), use_container_width=True, hide_index=True)
    else:
        st.info("No transactions yet.")


def render_category_breakdown(title: str, summaries: list[CategorySummary], total):
    st.markdown(f"### {title}")
    for summary, color in assign_colors(summaries):
        share = summary.share_of(total)
        st.markdown(
            f":{color}[●] **{summary.category}** {format_currency(summary.amount)} "
            f"({share:.0f}%)"
        )
        st.progress(min(float(share) / 100, 1.0))


def render_reports_page(store: TransactionStore):
    """Render today's figures and category breakdowns."""
    st.title("📊 Reports")

    st.markdown(f"### Today ({date.today():%d %b %Y})")
    col1, col2, col3 = st.columns(3)
    col1.metric("Income", format_currency(store.today_income()))
    col2.metric("Expense", format_currency(store.today_expense()))
    col3.metric("Balance", format_currency(store.today_balance()))

    expenses = store.expense_by_category()
    if expenses:
        render_category_breakdown("Expenses by Category", expenses, store.total_expense())

    income = store.income_by_category()
    if income:
        render_category_breakdown("Income by Category", income, store.total_income())


if __name__ == "__main__":
    main()
