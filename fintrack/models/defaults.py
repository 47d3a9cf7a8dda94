"""
Default data for a fresh finance document.

A new store starts with these categories and payment methods.
Clearing all data restores them.
"""

from fintrack.models.finance import (
    Category,
    ExpenseType,
    PaymentMethod,
    PaymentMethodType,
    TransactionType,
)


_FIXED = ExpenseType.FIXED
_VARIABLE = ExpenseType.VARIABLE
_EXPENSE = TransactionType.EXPENSE
_INCOME = TransactionType.INCOME

# (id, name, icon, expense type, kind)
_CATEGORY_ROWS = [
    # Fixed expenses
    ("cat-1", "Aluguel", "Home", _FIXED, _EXPENSE),
    ("cat-2", "Condomínio", "Building", _FIXED, _EXPENSE),
    ("cat-3", "Internet", "Wifi", _FIXED, _EXPENSE),
    ("cat-4", "Assinaturas", "Play", _FIXED, _EXPENSE),
    ("cat-5", "Energia", "Zap", _FIXED, _EXPENSE),
    ("cat-6", "Água", "Droplets", _FIXED, _EXPENSE),
    ("cat-7", "Gás", "Flame", _FIXED, _EXPENSE),
    ("cat-8", "Telefone", "Phone", _FIXED, _EXPENSE),
    ("cat-9", "Seguro", "Shield", _FIXED, _EXPENSE),
    ("cat-10", "Financiamento", "Landmark", _FIXED, _EXPENSE),
    ("cat-11", "Mensalidade Escolar", "GraduationCap", _FIXED, _EXPENSE),
    ("cat-12", "Academia", "Dumbbell", _FIXED, _EXPENSE),
    # Variable expenses
    ("cat-20", "Alimentação", "Utensils", _VARIABLE, _EXPENSE),
    ("cat-21", "Mercado", "ShoppingCart", _VARIABLE, _EXPENSE),
    ("cat-22", "Transporte", "Car", _VARIABLE, _EXPENSE),
    ("cat-23", "Combustível", "Fuel", _VARIABLE, _EXPENSE),
    ("cat-24", "Lazer", "Gamepad2", _VARIABLE, _EXPENSE),
    ("cat-25", "Saúde", "HeartPulse", _VARIABLE, _EXPENSE),
    ("cat-26", "Farmácia", "Pill", _VARIABLE, _EXPENSE),
    ("cat-27", "Compras", "ShoppingBag", _VARIABLE, _EXPENSE),
    ("cat-28", "Roupas", "Shirt", _VARIABLE, _EXPENSE),
    ("cat-29", "Educação", "BookOpen", _VARIABLE, _EXPENSE),
    ("cat-30", "Presentes", "Gift", _VARIABLE, _EXPENSE),
    ("cat-31", "Pets", "PawPrint", _VARIABLE, _EXPENSE),
    ("cat-32", "Viagem", "Plane", _VARIABLE, _EXPENSE),
    ("cat-33", "Manutenção Casa", "Wrench", _VARIABLE, _EXPENSE),
    ("cat-34", "Eletrônicos", "Smartphone", _VARIABLE, _EXPENSE),
    ("cat-35", "Beleza", "Sparkles", _VARIABLE, _EXPENSE),
    ("cat-36", "Outros (Despesa)", "MoreHorizontal", _VARIABLE, _EXPENSE),
    # Fixed income
    ("cat-50", "Salário", "Briefcase", _FIXED, _INCOME),
    ("cat-51", "Aposentadoria", "Armchair", _FIXED, _INCOME),
    ("cat-52", "Pensão", "HandCoins", _FIXED, _INCOME),
    ("cat-53", "Aluguel Recebido", "KeyRound", _FIXED, _INCOME),
    ("cat-54", "Benefício", "BadgeCheck", _FIXED, _INCOME),
    # Variable income
    ("cat-60", "Freelance", "Laptop", _VARIABLE, _INCOME),
    ("cat-61", "Investimentos", "TrendingUp", _VARIABLE, _INCOME),
    ("cat-62", "Dividendos", "PiggyBank", _VARIABLE, _INCOME),
    ("cat-63", "Venda", "Store", _VARIABLE, _INCOME),
    ("cat-64", "Presente Recebido", "PartyPopper", _VARIABLE, _INCOME),
    ("cat-65", "Reembolso", "RotateCcw", _VARIABLE, _INCOME),
    ("cat-66", "Prêmio/Bônus", "Trophy", _VARIABLE, _INCOME),
    ("cat-67", "Outros (Receita)", "Coins", _VARIABLE, _INCOME),
]

DEFAULT_CATEGORIES: list[Category] = [
    Category(id=id_, name=name, icon=icon, expense_type=expense_type, type=kind)
    for id_, name, icon, expense_type, kind in _CATEGORY_ROWS
]

DEFAULT_PAYMENT_METHODS: list[PaymentMethod] = [
    PaymentMethod(id="pm-1", name="Dinheiro", type=PaymentMethodType.CASH),
    PaymentMethod(id="pm-2", name="PIX", type=PaymentMethodType.BANK_ACCOUNT),
    PaymentMethod(id="pm-3", name="Débito", type=PaymentMethodType.BANK_ACCOUNT),
    PaymentMethod(
        id="pm-4",
        name="Cartão de Crédito",
        type=PaymentMethodType.CREDIT_CARD,
        limit=5000,
        closing_day=5,
        due_day=15,
    ),
    PaymentMethod(id="pm-5", name="Transferência", type=PaymentMethodType.BANK_ACCOUNT),
]

# Breakdown colours, assigned in order of first appearance
CHART_COLORS: list[str] = [
    "hsl(173, 58%, 39%)",  # teal
    "hsl(199, 89%, 48%)",  # blue
    "hsl(262, 83%, 58%)",  # purple
    "hsl(38, 92%, 50%)",   # amber
    "hsl(0, 72%, 51%)",    # red
    "hsl(152, 69%, 40%)",  # green
    "hsl(326, 78%, 48%)",  # pink
    "hsl(20, 90%, 48%)",   # orange
    "hsl(47, 96%, 53%)",   # yellow
    "hsl(221, 83%, 53%)",  # indigo
]

# Shown for transactions whose category no longer exists
UNRESOLVED_CATEGORY_LABEL = "Sem categoria"
UNRESOLVED_CATEGORY_ICON = "Coins"
