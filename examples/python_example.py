"""
Example: using Reorderly from Python.

Generates the mock products, runs two training cycles and writes the
scored products to CSV.
"""

from reorderly.models import ReorderSession
from reorderly.utils.helpers import format_accuracy


def main():
    session = ReorderSession(count=150)
    print(f"Products: {len(session.products)}")
    print(f"Rule reorders: {session.stats()['server_reorders']}")

    try:
        for cycle in (1, 2):
            result = session.train_and_predict()
            if not result.success:
                print(f"Cycle {cycle} failed: {result.error}")
                return
            print(f"Cycle {cycle}: val accuracy {format_accuracy(result.val_accuracy)} "
                  f"in {result.duration_seconds:.2f}s")

        stats = session.stats()
        print(f"Model reorders: {stats['model_reorders']}")

        for p in session.products[:5]:
            print(f"  {p.id:>3} {p.name:<16} rule={p.reorder} model={p.prediction_text} "
                  f"score={p.prediction_score:.3f}")

        path = session.export("data/exports/products_with_predictions.csv")
        print(f"Saved to {path}")
    finally:
        session.close()


if __name__ == "__main__":
    main()
