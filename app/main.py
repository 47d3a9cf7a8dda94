"""
Streamlit Frontend for the Finance Tracker

The screens a person uses every day to record what came in and what
went out, month by month.

DESIGN PRINCIPLES:
1. Simple, clear interface
2. Every figure is recomputed from the transactions, never typed twice
3. Clear messages when something can't be saved
4. Storage trouble is shown, never fatal
5. No hidden actions

The form enforces the itemised-expense rules:
- Expenses are recorded item by item, each item with a category
- The declared amount and the item sum are compared, never silently fixed
- Nothing reaches the store until the draft validates
"""

from datetime import date
from typing import Optional

import streamlit as st

from fintrack.config import get_settings, validate_all_settings
from fintrack.models.finance import (
    ExpenseType,
    PaymentMethodType,
    Transaction,
    TransactionType,
)
from fintrack.orchestrator import (
    TransactionFlow,
    connect_data_file,
    create_app_components,
    disconnect_data_file,
)
from fintrack.reports import (
    MonthlyAggregator,
    filter_transactions,
    group_by_month,
    has_active_filters,
)
from fintrack.services.storage import FallbackStorage, FinanceStorageInterface
from fintrack.store import FinanceStore
from fintrack.utils import (
    current_month,
    format_currency,
    format_date,
    format_full_date,
    format_month_year,
    format_percentage,
    format_signed_currency,
    month_start,
    shift_month,
)
from fintrack.validation import ItemListEditor, TransactionDraft, parse_number


# Page configuration
st.set_page_config(
    page_title="Finance Tracker",
    page_icon="💰",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Custom CSS for better UX
st.markdown("""
<style>
    .stButton>button {
        width: 100%;
    }
    .success-box {
        padding: 20px;
        background-color: #d4edda;
        border-radius: 10px;
        border-left: 5px solid #28a745;
        margin: 10px 0;
    }
    .warning-box {
        padding: 20px;
        background-color: #fff3cd;
        border-radius: 10px;
        border-left: 5px solid #ffc107;
        margin: 10px 0;
    }
    .error-box {
        padding: 20px;
        background-color: #f8d7da;
        border-radius: 10px;
        border-left: 5px solid #dc3545;
        margin: 10px 0;
    }
    .balance-box {
        padding: 20px;
        background-color: #e6f4f1;
        border-radius: 10px;
        border-left: 5px solid #2a9d8f;
        margin: 10px 0;
    }
    .big-number {
        font-size: 2.5em;
        font-weight: bold;
        color: #2c3e50;
    }
    .bar {
        height: 10px;
        border-radius: 5px;
    }
</style>
""", unsafe_allow_html=True)

PAGES = [
    "📊 Dashboard",
    "📋 Transactions",
    "➕ New Transaction",
    "🏷️ Categories",
    "💳 Payment Methods",
    "⚙️ Settings",
]

# Icon tags stored on categories, shown as emoji
ICON_EMOJI = {
    "Home": "🏠", "Building": "🏢", "Wifi": "📶", "Play": "▶️", "Zap": "⚡",
    "Droplets": "💧", "Smartphone": "📱", "Shield": "🛡️", "GraduationCap": "🎓",
    "Dumbbell": "🏋️", "Heart": "❤️", "ShoppingCart": "🛒", "Utensils": "🍽️",
    "Car": "🚗", "Fuel": "⛽", "Bus": "🚌", "Pill": "💊", "Stethoscope": "🩺",
    "Shirt": "👕", "Gift": "🎁", "Plane": "✈️", "Film": "🎬", "Book": "📚",
    "PawPrint": "🐾", "Scissors": "✂️", "Wrench": "🔧", "Briefcase": "💼",
    "TrendingUp": "📈", "Laptop": "💻", "Coins": "🪙", "PiggyBank": "🐷",
    "MoreHorizontal": "•",
}

PAYMENT_TYPE_LABELS = {
    PaymentMethodType.CREDIT_CARD: "Credit card",
    PaymentMethodType.CASH: "Cash",
    PaymentMethodType.BANK_ACCOUNT: "Bank account",
}


def icon_for(tag: str) -> str:
    return ICON_EMOJI.get(tag, "•")


def get_components() -> tuple[FinanceStore, TransactionFlow, FinanceStorageInterface]:
    """
    Get or create the components for this browser session.

    Kept in session state (not cache_resource) because connecting a
    data file replaces them.
    """
    if "components" not in st.session_state:
        st.session_state.components = create_app_components()
    return st.session_state.components


def main():
    """Main application entry point."""
    store, flow, storage = get_components()
    settings = get_settings()

    # Sidebar navigation
    st.sidebar.title("💰 Finance Tracker")
    st.sidebar.markdown("---")

    page = st.sidebar.radio("Navigate to:", PAGES, key="page")

    st.sidebar.markdown("---")
    st.sidebar.caption(f"Saving to: {storage.describe()}")
    if store.saver is not None and store.saver.last_error:
        st.sidebar.error(f"Last save failed: {store.saver.last_error}")
    if isinstance(storage, FallbackStorage) and storage.advisory:
        st.sidebar.warning(storage.advisory)

    symbol = settings.app.currency_symbol

    # Route to appropriate page
    if page == "📊 Dashboard":
        render_dashboard_page(store, symbol, settings.app.recent_transactions_limit)
    elif page == "📋 Transactions":
        render_transactions_page(store, flow, symbol)
    elif page == "➕ New Transaction":
        render_form_page(store, flow, symbol)
    elif page == "🏷️ Categories":
        render_categories_page(store)
    elif page == "💳 Payment Methods":
        render_payment_methods_page(store, symbol)
    elif page == "⚙️ Settings":
        render_settings_page(store, storage)


# =============================================================================
# SHARED WIDGETS
# =============================================================================

def render_transaction_row(
    store: FinanceStore,
    transaction: Transaction,
    symbol: str,
    flow: Optional[TransactionFlow] = None,
):
    """One transaction line; with a flow, adds edit and delete buttons."""
    view = store.describe_transaction(transaction)
    signed = transaction.amount if transaction.type == TransactionType.INCOME else -transaction.amount
    color = "#28a745" if signed > 0 else "#dc3545"

    details = f"{icon_for(view.category_icon)} {view.category_name} · {format_date(transaction.date)}"
    if view.payment_method_name:
        details += f" · {view.payment_method_name}"

    if flow is None:
        col1, col2 = st.columns([4, 2])
    else:
        col1, col2, col3, col4 = st.columns([4, 2, 1, 1])

    with col1:
        st.markdown(f"**{transaction.description}**  \n{details}")
        if transaction.notes:
            st.caption(transaction.notes)
    with col2:
        st.markdown(
            f"<span style='color:{color};font-weight:bold'>"
            f"{format_signed_currency(signed, symbol)}</span>",
            unsafe_allow_html=True,
        )

    if flow is not None:
        with col3:
            st.button(
                "✏️",
                key=f"edit_{transaction.id}",
                help="Edit",
                on_click=start_editing,
                args=(transaction,),
            )
        with col4:
            if st.button("🗑️", key=f"delete_{transaction.id}", help="Delete"):
                flow.delete(transaction.id)
                st.rerun()

    if transaction.items:
        with st.expander(f"{len(transaction.items)} item(s)"):
            for item in transaction.items:
                category = store.get_category_by_id(item.category_id or "")
                line = (
                    f"{item.name}: {item.quantity:g} × {format_currency(item.unit_price, symbol)}"
                )
                if item.discount:
                    line += f" − {format_currency(item.discount, symbol)}"
                line += f" = **{format_currency(item.total_price, symbol)}**"
                if category:
                    line += f" · {category.name}"
                st.markdown(line)


# =============================================================================
# DASHBOARD
# =============================================================================

def _shift_selected_month(delta: int):
    year, month = st.session_state.selected_month
    st.session_state.selected_month = shift_month(year, month, delta)


def render_dashboard_page(store: FinanceStore, symbol: str, recent_limit: int):
    """Render the monthly dashboard."""
    st.title("📊 Dashboard")

    if "selected_month" not in st.session_state:
        st.session_state.selected_month = current_month()
    year, month = st.session_state.selected_month

    # Month selector
    col1, col2, col3 = st.columns([1, 3, 1])
    with col1:
        st.button("◀", on_click=_shift_selected_month, args=(-1,), key="month_prev")
    with col2:
        st.markdown(
            f"<h3 style='text-align:center'>{format_month_year(month_start(year, month)).capitalize()}</h3>",
            unsafe_allow_html=True,
        )
    with col3:
        st.button("▶", on_click=_shift_selected_month, args=(1,), key="month_next")

    aggregator = MonthlyAggregator(store.transactions, store.categories)
    summary = aggregator.summarize(year, month)
    balance = summary.balance

    # Balance card
    st.markdown(f"""
    <div class="balance-box">
        <p>Balance for the month</p>
        <p class="big-number">{format_currency(balance.balance, symbol)}</p>
    </div>
    """, unsafe_allow_html=True)

    col1, col2 = st.columns(2)
    with col1:
        st.metric("Income", format_currency(balance.income, symbol))
    with col2:
        st.metric("Expenses", format_currency(balance.expenses, symbol))

    st.markdown("---")
    st.subheader("Expenses by category")

    if not summary.expenses_by_category:
        st.info("No expenses this month.")
    for entry in summary.expenses_by_category:
        col1, col2 = st.columns([3, 2])
        with col1:
            st.markdown(f"{icon_for(entry.category_icon)} **{entry.category_name}**")
            st.markdown(
                f"<div class='bar' style='background:{entry.color};"
                f"width:{max(entry.percentage, 1):.1f}%'></div>",
                unsafe_allow_html=True,
            )
        with col2:
            st.markdown(
                f"{format_currency(entry.amount, symbol)} "
                f"({format_percentage(entry.percentage)})"
            )

    st.markdown("---")
    st.subheader("Recent transactions")

    recent = aggregator.recent(recent_limit)
    if not recent:
        st.info("No transactions yet. Use 'New Transaction' to add your first one.")
    for transaction in recent:
        render_transaction_row(store, transaction, symbol)


# =============================================================================
# TRANSACTIONS
# =============================================================================

def render_transactions_page(store: FinanceStore, flow: TransactionFlow, symbol: str):
    """Render the statement with filters."""
    st.title("📋 Transactions")

    col1, col2, col3 = st.columns(3)
    with col1:
        search = st.text_input("Search", placeholder="Description contains...")
    with col2:
        type_filter = st.selectbox(
            "Type",
            options=["all", TransactionType.INCOME.value, TransactionType.EXPENSE.value],
            format_func=lambda x: {"all": "All", "income": "Income", "expense": "Expense"}[x],
        )
    with col3:
        category_names = {c.id: c.name for c in store.categories}
        category_filter = st.selectbox(
            "Category",
            options=["all"] + list(category_names),
            format_func=lambda x: "All categories" if x == "all" else category_names[x],
        )

    matches = filter_transactions(store.transactions, search, type_filter, category_filter)

    st.markdown("---")

    if not matches:
        if has_active_filters(search, type_filter, category_filter):
            st.info("No transactions match these filters.")
        else:
            st.info("No transactions yet. Use 'New Transaction' to add your first one.")
        return

    for label, transactions in group_by_month(matches).items():
        st.subheader(label.capitalize())
        for transaction in transactions:
            render_transaction_row(store, transaction, symbol, flow)


# =============================================================================
# TRANSACTION FORM
# =============================================================================

FORM_FIELDS = {
    "form_type": lambda d: d.type.value,
    "form_description": lambda d: d.description,
    "form_amount": lambda d: d.amount,
    "form_category": lambda d: d.category_id,
    "form_payment_method": lambda d: d.payment_method_id,
    "form_date": lambda d: d.date,
    "form_notes": lambda d: d.notes,
}


def load_form(draft: TransactionDraft, transaction_id: Optional[str] = None):
    """Put a draft into the form widgets."""
    for key, getter in FORM_FIELDS.items():
        st.session_state[key] = getter(draft)
    st.session_state.form_amount_accepted = draft.amount
    st.session_state.form_editor = draft.items_editor()
    st.session_state.form_editing_id = transaction_id
    st.session_state.form_message = None


def start_editing(transaction: Transaction):
    load_form(TransactionDraft.from_transaction(transaction), transaction.id)
    st.session_state.page = "➕ New Transaction"


def _ensure_form():
    if "form_editor" not in st.session_state:
        load_form(TransactionDraft())
        return
    # Widget state is dropped while another page is shown
    draft = TransactionDraft()
    for key, getter in FORM_FIELDS.items():
        st.session_state.setdefault(key, getter(draft))


def _editor() -> ItemListEditor:
    editor = st.session_state.form_editor
    editor.target_total = parse_number(st.session_state.form_amount)
    return editor


def _on_type_change(store: FinanceStore):
    editor = _editor()
    draft = TransactionDraft(category_id=st.session_state.form_category, items=editor.items)
    draft.set_type(TransactionType(st.session_state.form_type), store.categories)
    st.session_state.form_category = draft.category_id
    st.session_state.form_editor = ItemListEditor(draft.items, editor.target_total)


def _on_amount_change():
    draft = TransactionDraft(amount=st.session_state.get("form_amount_accepted", ""))
    if draft.set_amount_text(st.session_state.form_amount):
        st.session_state.form_message = None
    else:
        st.session_state.form_message = "Use digits and at most two decimal places."
    st.session_state.form_amount = draft.amount
    st.session_state.form_amount_accepted = draft.amount


def _add_item():
    editor = _editor()
    item = editor.add_item(
        name=st.session_state.item_name,
        unit_price=st.session_state.item_price,
        quantity=st.session_state.item_quantity,
        discount=st.session_state.item_discount,
        category_id=st.session_state.item_category or None,
    )
    if item is None:
        st.session_state.item_message = "An item needs a name and a price."
        return
    st.session_state.form_amount = f"{editor.target_total:.2f}"
    st.session_state.form_amount_accepted = st.session_state.form_amount
    st.session_state.item_message = None
    st.session_state.item_name = ""
    st.session_state.item_price = ""
    st.session_state.item_quantity = "1"
    st.session_state.item_discount = ""


def _update_item(item_id: str, field: str, key: str):
    _editor().update_item(item_id, field, st.session_state[key])


def _remove_item(item_id: str):
    _editor().remove_item(item_id)


def _sync_total():
    editor = _editor()
    st.session_state.form_amount = f"{editor.sync_total():.2f}"
    st.session_state.form_amount_accepted = st.session_state.form_amount


def _reset_form():
    load_form(TransactionDraft())


def current_draft() -> TransactionDraft:
    """The draft as currently entered in the form."""
    editor = _editor()
    draft = TransactionDraft(
        type=TransactionType(st.session_state.form_type),
        description=st.session_state.form_description,
        amount=st.session_state.form_amount,
        category_id=st.session_state.form_category or "",
        payment_method_id=st.session_state.form_payment_method or "",
        date=st.session_state.form_date or date.today(),
        notes=st.session_state.form_notes,
    )
    if draft.is_expense:
        draft.apply_items(editor)
    return draft


def render_item_editor(store: FinanceStore, symbol: str):
    """Item list, reconciliation and the add-item row."""
    editor = _editor()
    expense_categories = {
        c.id: c.name for c in store.categories if c.type == TransactionType.EXPENSE
    }
    category_options = [""] + list(expense_categories)

    def category_label(category_id):
        return expense_categories.get(category_id, "Choose a category")

    st.markdown("### Items")

    for item in editor.items:
        col1, col2, col3, col4, col5, col6 = st.columns([3, 1, 1, 1, 2, 1])
        with col1:
            key = f"item_{item.id}_name"
            st.session_state.setdefault(key, item.name)
            st.text_input("Name", key=key, on_change=_update_item, args=(item.id, "name", key))
        with col2:
            key = f"item_{item.id}_quantity"
            st.session_state.setdefault(key, f"{item.quantity:g}")
            st.text_input("Qty", key=key, on_change=_update_item, args=(item.id, "quantity", key))
        with col3:
            key = f"item_{item.id}_unit_price"
            st.session_state.setdefault(key, f"{item.unit_price:.2f}")
            st.text_input("Price", key=key, on_change=_update_item, args=(item.id, "unit_price", key))
        with col4:
            key = f"item_{item.id}_discount"
            st.session_state.setdefault(key, f"{item.discount:.2f}" if item.discount else "")
            st.text_input("Discount", key=key, on_change=_update_item, args=(item.id, "discount", key))
        with col5:
            key = f"item_{item.id}_category_id"
            st.session_state.setdefault(key, item.category_id or "")
            st.selectbox(
                "Category",
                options=category_options,
                format_func=category_label,
                key=key,
                on_change=_update_item,
                args=(item.id, "category_id", key),
            )
        with col6:
            st.markdown(f"**{format_currency(item.total_price, symbol)}**")
            st.button("🗑️", key=f"remove_{item.id}", on_click=_remove_item, args=(item.id,))

    # Add item row
    for key, default in (("item_name", ""), ("item_price", ""), ("item_quantity", "1"), ("item_discount", "")):
        st.session_state.setdefault(key, default)
    st.session_state.setdefault("item_category", "")

    with st.expander("➕ Add item", expanded=not editor.items):
        col1, col2, col3, col4 = st.columns([3, 1, 1, 1])
        with col1:
            st.text_input("Item name", key="item_name")
        with col2:
            st.text_input("Quantity", key="item_quantity")
        with col3:
            st.text_input("Unit price", key="item_price")
        with col4:
            st.text_input("Discount", key="item_discount")
        st.selectbox(
            "Item category",
            options=category_options,
            format_func=category_label,
            key="item_category",
        )
        st.button("Add item", on_click=_add_item)
        if st.session_state.get("item_message"):
            st.error(st.session_state.item_message)

    if editor.items:
        reconciliation = editor.reconciliation
        col1, col2, col3 = st.columns(3)
        col1.metric("Items total", format_currency(reconciliation.items_total, symbol))
        col2.metric("Discounts", format_currency(reconciliation.total_discount, symbol))
        col3.metric("Difference", format_signed_currency(reconciliation.difference, symbol))

        if reconciliation.has_mismatch:
            st.markdown(f"""
            <div class="warning-box">
                <h4>⚠️ Items don't add up</h4>
                <p>The items total {format_currency(reconciliation.items_total, symbol)},
                the amount says {format_currency(reconciliation.target_total, symbol)}.</p>
            </div>
            """, unsafe_allow_html=True)
            st.button("🔄 Use items total as amount", on_click=_sync_total)


def render_form_page(store: FinanceStore, flow: TransactionFlow, symbol: str):
    """Render the new/edit transaction form."""
    _ensure_form()
    editing_id = st.session_state.get("form_editing_id")

    st.title("✏️ Edit Transaction" if editing_id else "➕ New Transaction")

    st.radio(
        "Type",
        options=[TransactionType.EXPENSE.value, TransactionType.INCOME.value],
        format_func=lambda x: "Expense" if x == "expense" else "Income",
        horizontal=True,
        key="form_type",
        on_change=_on_type_change,
        args=(store,),
    )
    is_expense = st.session_state.form_type == TransactionType.EXPENSE.value

    col1, col2 = st.columns(2)
    with col1:
        st.text_input("Description *", key="form_description")
        st.text_input(
            f"Amount ({symbol}) *",
            key="form_amount",
            on_change=_on_amount_change,
            help="Digits with up to two decimals, e.g. 123.45",
        )
        if st.session_state.get("form_message"):
            st.error(st.session_state.form_message)
        st.date_input("Date *", key="form_date")

    with col2:
        if not is_expense:
            income_categories = {
                c.id: c.name for c in store.categories if c.type == TransactionType.INCOME
            }
            st.selectbox(
                "Category *",
                options=[""] + list(income_categories),
                format_func=lambda x: income_categories.get(x, "Choose a category"),
                key="form_category",
            )
        methods = {m.id: m.name for m in store.payment_methods}
        st.selectbox(
            "Payment method *",
            options=[""] + list(methods),
            format_func=lambda x: methods.get(x, "Choose a payment method"),
            key="form_payment_method",
        )
        st.text_area("Notes (optional)", key="form_notes")

    if is_expense:
        st.markdown("---")
        render_item_editor(store, symbol)

    st.markdown("---")

    draft = current_draft()
    validation = flow.validator.validate(draft)
    if validation.issues:
        st.caption(flow.validator.get_user_friendly_summary(validation))

    col1, col2 = st.columns(2)
    with col1:
        if st.button("✅ Save", type="primary"):
            transaction, result = flow.submit(draft, editing_id)
            if transaction is None:
                st.markdown(f"""
                <div class="error-box">
                    <h4>❌ Not saved</h4>
                    <p>{flow.validator.get_user_friendly_summary(result)}</p>
                </div>
                """, unsafe_allow_html=True)
            else:
                st.session_state.form_saved = (
                    f"Saved '{transaction.description}' on {format_full_date(transaction.date)}."
                )
                _reset_form()
                st.rerun()
    with col2:
        st.button("❌ Clear form", on_click=_reset_form)

    if st.session_state.get("form_saved"):
        st.success(st.session_state.pop("form_saved"))


# =============================================================================
# CATEGORIES
# =============================================================================

def render_categories_page(store: FinanceStore):
    """Render category management."""
    st.title("🏷️ Categories")

    with st.expander("➕ New category"):
        with st.form("new_category", clear_on_submit=True):
            name = st.text_input("Name *")
            kind = st.selectbox(
                "Type",
                options=list(TransactionType),
                format_func=lambda x: x.value.title(),
            )
            expense_type = st.selectbox(
                "Expense type",
                options=[None] + list(ExpenseType),
                format_func=lambda x: "—" if x is None else x.value.title(),
            )
            icon = st.selectbox("Icon", options=list(ICON_EMOJI), format_func=lambda x: f"{icon_for(x)} {x}")
            if st.form_submit_button("Add category"):
                if not name.strip():
                    st.error("Please enter a name")
                else:
                    store.add_category(
                        name=name,
                        type=kind,
                        icon=icon,
                        expense_type=expense_type if kind == TransactionType.EXPENSE else None,
                    )
                    st.rerun()

    for kind, title in ((TransactionType.EXPENSE, "Expenses"), (TransactionType.INCOME, "Income")):
        st.subheader(title)
        for category in [c for c in store.categories if c.type == kind]:
            col1, col2 = st.columns([5, 1])
            with col1:
                label = f"{icon_for(category.icon)} {category.name}"
                if category.expense_type:
                    label += f" · {category.expense_type.value}"
                with st.expander(label):
                    with st.form(f"edit_{category.id}"):
                        new_name = st.text_input("Name", value=category.name)
                        icons = list(ICON_EMOJI)
                        new_icon = st.selectbox(
                            "Icon",
                            options=icons,
                            index=icons.index(category.icon) if category.icon in icons else len(icons) - 1,
                            format_func=lambda x: f"{icon_for(x)} {x}",
                        )
                        if st.form_submit_button("Save"):
                            if new_name.strip():
                                store.update_category(category.id, name=new_name, icon=new_icon)
                                st.rerun()
                            else:
                                st.error("Please enter a name")
            with col2:
                if st.button("🗑️", key=f"delete_{category.id}", help="Delete"):
                    store.delete_category(category.id)
                    st.rerun()

    st.caption("Transactions in a deleted category are kept and shown as 'Sem categoria'.")


# =============================================================================
# PAYMENT METHODS
# =============================================================================

def render_payment_methods_page(store: FinanceStore, symbol: str):
    """Render payment method management."""
    st.title("💳 Payment Methods")

    with st.expander("➕ New payment method"):
        with st.form("new_payment_method", clear_on_submit=True):
            name = st.text_input("Name *")
            kind = st.selectbox(
                "Type",
                options=list(PaymentMethodType),
                format_func=lambda x: PAYMENT_TYPE_LABELS[x],
            )
            st.caption("Credit cards only:")
            limit = st.number_input(f"Limit ({symbol})", min_value=0.0, step=100.0, value=0.0)
            closing_day = st.number_input("Closing day", min_value=0, max_value=31, value=0)
            due_day = st.number_input("Due day", min_value=0, max_value=31, value=0)
            if st.form_submit_button("Add payment method"):
                if not name.strip():
                    st.error("Please enter a name")
                else:
                    card = kind == PaymentMethodType.CREDIT_CARD
                    store.add_payment_method(
                        name=name,
                        type=kind,
                        limit=limit if card and limit else None,
                        closing_day=int(closing_day) if card and closing_day else None,
                        due_day=int(due_day) if card and due_day else None,
                    )
                    st.rerun()

    for method in store.payment_methods:
        col1, col2 = st.columns([5, 1])
        with col1:
            details = PAYMENT_TYPE_LABELS[method.type]
            if method.limit:
                details += f" · limit {format_currency(method.limit, symbol)}"
            if method.closing_day:
                details += f" · closes on {method.closing_day}"
            if method.due_day:
                details += f" · due on {method.due_day}"
            with st.expander(f"**{method.name}** · {details}"):
                with st.form(f"edit_{method.id}"):
                    new_name = st.text_input("Name", value=method.name)
                    if st.form_submit_button("Save"):
                        if new_name.strip():
                            store.update_payment_method(method.id, name=new_name)
                            st.rerun()
                        else:
                            st.error("Please enter a name")
        with col2:
            if st.button("🗑️", key=f"delete_{method.id}", help="Delete"):
                store.delete_payment_method(method.id)
                st.rerun()


# =============================================================================
# SETTINGS
# =============================================================================

def render_settings_page(store: FinanceStore, storage):
    """Render the settings page."""
    st.title("⚙️ Settings")
    settings = get_settings()

    st.markdown("### Data file")
    st.markdown(f"Your data is being saved to **{storage.describe()}**.")

    if isinstance(storage, FallbackStorage) and storage.advisory:
        st.markdown(f"""
        <div class="warning-box">
            <h4>⚠️ Storage problem</h4>
            <p>{storage.advisory}</p>
        </div>
        """, unsafe_allow_html=True)

    data_file = st.text_input(
        "Data file path",
        placeholder=f"~/Documents/{settings.storage.suggested_file_name}",
        help="A JSON file you can open, copy or back up. It is created if it doesn't exist.",
    )

    col1, col2, col3 = st.columns(3)
    with col1:
        if st.button("📂 Connect data file", type="primary", disabled=not data_file.strip()):
            st.session_state.components = connect_data_file(store, data_file.strip())
            st.rerun()
    with col2:
        if st.button("🔌 Disconnect"):
            st.session_state.components = disconnect_data_file(store)
            st.rerun()
    with col3:
        if st.button("💾 Save now") and store.saver is not None:
            if store.saver.flush() or not store.saver.has_pending:
                st.success("Saved.")

    if store.saver is not None and store.saver.last_saved:
        st.caption(f"Last saved: {store.saver.last_saved}")

    st.markdown("---")
    st.markdown("### Configuration")

    status = validate_all_settings()
    for name, key in (("Storage", "storage"), ("Application", "app")):
        if status.get(key, False):
            st.success(f"✅ {name} settings - OK")
        else:
            st.error(f"❌ {name} settings - {status.get(f'{key}_error', 'Invalid')}")

    st.markdown(
        "Settings come from environment variables or a `.env` file "
        "(e.g. `FINTRACK_STORAGE_DATA_FILE`, `FINTRACK_STORAGE_DEBOUNCE_MS`, `LOG_LEVEL`)."
    )

    st.markdown("---")
    st.markdown("### Danger zone")
    confirm = st.checkbox("I understand all transactions will be deleted")
    if st.button("🗑️ Clear all data", disabled=not confirm):
        store.clear_all_data()
        st.success("All data cleared. Default categories and payment methods restored.")


if __name__ == "__main__":
    main()
