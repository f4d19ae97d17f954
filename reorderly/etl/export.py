import pandas as pd
from pathlib import Path

from reorderly.utils.exceptions import EmptyDatasetException
from reorderly.utils.logger import logger
from reorderly.utils.types import PathLike, Product

# Written by hand: the name is always quoted and unscored fields stay blank, which to_csv can't produce.
HEADER = ['id', 'name', 'currentInventory', 'avgSalesPerWeek', 'daysToReplenish',
          'serverReorder', 'prediction', 'predictionScore']


def _quote(value: str) -> str:
    return '"' + str(value).replace('"', '""') + '"'


def _row(p: Product) -> str:
    return ','.join([
        str(p.id),
        _quote(p.name),
        str(p.current_inventory),
        str(p.avg_sales_per_week),
        str(p.days_to_replenish),
        str(p.reorder),
        '' if p.prediction is None else str(p.prediction),
        '' if p.prediction_score is None else f'{p.prediction_score:.4f}',
    ])


def to_csv_text(products: list[Product]) -> str:
    """CSV document for the products; prediction fields stay blank until scored."""
    if not products:
        raise EmptyDatasetException('No products to download.')
    return '\n'.join([','.join(HEADER)] + [_row(p) for p in products])


def export_csv(products: list[Product], path: PathLike) -> Path:
    out = Path(path)
    text = to_csv_text(products)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text, encoding='utf-8')
    logger.info(f'Exported {len(products)} products to {out}')
    return out


def load_csv(path: PathLike) -> list[Product]:
    """Reads a file written by ``export_csv`` back into products."""
    df = pd.read_csv(path, dtype={'name': str})
    missing = [c for c in HEADER if c not in df.columns]
    if missing:
        raise ValueError(f'Not an export file, missing columns: {missing}')
    products = []
    for row in df.itertuples(index=False):
        scored = not pd.isna(row.predictionScore)
        products.append(Product(
            id=int(row.id),
            name=row.name,
            current_inventory=int(row.currentInventory),
            avg_sales_per_week=int(row.avgSalesPerWeek),
            days_to_replenish=int(row.daysToReplenish),
            reorder=int(row.serverReorder),
            prediction_score=float(row.predictionScore) if scored else None,
            prediction=int(row.prediction) if not pd.isna(row.prediction) else None,
        ))
    logger.info(f'Loaded {len(products)} products from {path}')
    return products
