"""Top‑level package for the personal finance tracker.

The primary modules are:

* ``transactions`` / ``budgets`` – the stores that own the user's records
* ``analytics`` – derived views: monthly series, category totals, insights
* ``storage`` – key-value persistence for both collections
* ``tracker`` – the facade that ties mutations, recomputation and saving together
* ``dashboard`` – a Streamlit app on top of the tracker

To run the app from the command line you can execute:

```bash
streamlit run finance_tracker/dashboard.py
```
"""

from .analytics import DashboardSummary, FinanceAnalytics, Insight  # noqa: F401
from .budgets import BudgetStore  # noqa: F401
from .categories import CATEGORIES, Category, get_category  # noqa: F401
from .models import Budget, Transaction  # noqa: F401
from .storage import FinanceStorage, JsonFileKeyValueStore, MemoryKeyValueStore  # noqa: F401
from .tracker import FinanceTracker  # noqa: F401
from .transactions import TransactionStore  # noqa: F401

__all__ = [
    "Budget",
    "BudgetStore",
    "CATEGORIES",
    "Category",
    "DashboardSummary",
    "FinanceAnalytics",
    "FinanceStorage",
    "FinanceTracker",
    "Insight",
    "JsonFileKeyValueStore",
    "MemoryKeyValueStore",
    "Transaction",
    "TransactionStore",
    "get_category",
]
