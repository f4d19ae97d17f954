# reorderly/etl/create_synthetic.py
import math
import pandas as pd

from reorderly.utils.config import generator_config
from reorderly.utils.helpers import round_half_up
from reorderly.utils.types import Product
from reorderly.etl.feature_builder import products_to_frame

NAMES = [
    'Choco Bar', 'Soda Pack', 'Rice 5kg', 'Coffee Beans', 'Toothpaste', 'Shampoo', 'Notebook', 'Pen',
    'Soap Bar', 'Cereal', 'Juice Bottle', 'Water Bottle', 'Ketchup', 'Mayonnaise', 'Cookies', 'Tea Box',
    'Nuts Pack', 'Olive Oil', 'Pasta', 'Sauce',
]

SAFETY_FACTOR = 1.25
MAX_LEAD_DAYS = 21


def reorder_rule(current_inventory: int, avg_sales_per_week: int, days_to_replenish: int,
                 safety_factor: float = SAFETY_FACTOR) -> int:
    """1 when stock will not cover lead-time demand times the safety factor."""
    expected_during_lead = avg_sales_per_week * (days_to_replenish / 7)
    return 1 if current_inventory < expected_during_lead * safety_factor else 0


def make_product(i: int, safety_factor: float = SAFETY_FACTOR) -> Product:
    name = f'{NAMES[i % len(NAMES)]} {i}'
    avg_sales = max(1, round_half_up(abs(math.sin(i * 11)) * 120))
    inventory = max(0, round_half_up(abs(math.cos(i * 7)) * 400))
    lead_days = 1 + (i % MAX_LEAD_DAYS)
    return Product(
        id=i,
        name=name,
        current_inventory=inventory,
        avg_sales_per_week=avg_sales,
        days_to_replenish=lead_days,
        reorder=reorder_rule(inventory, avg_sales, lead_days, safety_factor),
    )


def generate(count: int | None = None, safety_factor: float | None = None) -> list[Product]:
    """Deterministic products with ids 1..count; no randomness involved."""
    cfg = generator_config()
    count = cfg['count'] if count is None else count
    safety_factor = cfg['safety_factor'] if safety_factor is None else safety_factor
    if count < 0:
        raise ValueError(f'count must be non-negative, got {count}')
    return [make_product(i, safety_factor) for i in range(1, count + 1)]


def generate_frame(count: int | None = None) -> pd.DataFrame:
    return products_to_frame(generate(count))


if __name__ == '__main__':
    products = generate()
    print(f'Generated {len(products)} products, rule reorders: {sum(p.reorder for p in products)}')
