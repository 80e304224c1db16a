"""
perfstat: implementazioni lente e veloci a confronto per piccoli calcoli statistici.

Il cuore è la tabulazione a due vie di vettori interi (fast_table); gli altri
moduli raccolgono varianti ottimizzate di lookup, medie mobili, regressione,
parsing di date, chi-quadro e aritmetica vettoriale, più un harness di benchmark.
"""

import pandas as pd

# Copy-on-Write: evita copie inutili nelle operazioni pandas (Pandas 2.0+)
pd.options.mode.copy_on_write = True

from .tabulate import ContingencyTable, Tabulator, fast_table, generic_table  # noqa: E402
from .validation import TabulationInputError, checked_table, validate_pair  # noqa: E402

__version__ = "0.1.0"

__all__ = [
    "ContingencyTable",
    "Tabulator",
    "fast_table",
    "generic_table",
    "TabulationInputError",
    "checked_table",
    "validate_pair",
]
