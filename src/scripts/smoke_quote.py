from datetime import date

from src.quoting.service import get_rate_table, quote_household_dict
from src.rating.currency import format_vnd

table = get_rate_table()

household = [
    {"date_of_birth": "20/02/2001", "gender": "female", "package": "3", "critical_illness": True, "maternity": True},
    {"date_of_birth": "20/02/1991", "gender": "male", "package": "3", "critical_illness": False, "maternity": False},
    {"date_of_birth": "20/02/1960", "gender": "male", "package": "1"},
]

out = quote_household_dict(household, today=date(2026, 2, 20))

print(f"Rates loaded: {len(table)} rows")
for i, p in enumerate(out["persons"], start=1):
    print(f"Person {i}: age={p['age']} {p['package_name']} total={format_vnd(p['total'])}")
print("Total:", out["total_display"])
print("Warnings:", out["warnings"])
