"""
Reorderly CLI

Usage:
    reorderly --help
    reorderly generate --count 150
    reorderly train --output data/exports/products_with_predictions.csv
"""

import sys

import click

from reorderly import __version__


@click.group()
@click.version_option(version=__version__, prog_name='Reorderly CLI')
def cli():
    """
    Reorderly - inventory reorder predictor.

    Generates mock products, trains the reorder classifier and compares
    it with the business rule.
    """
    pass


def _print_stats(stats):
    click.echo(f"  Products:                 {stats['total']}")
    click.echo(f"  Server reorders (rule):   {stats['server_reorders']}")
    click.echo(f"  Model predicted reorders: {stats['model_reorders']}")
    click.echo(f"  Model val accuracy:       {stats['model_accuracy']}")


@cli.command()
@click.option('--count', '-n', type=int, default=None, help='Number of products (default from configs/model.yaml)')
@click.option('--head', type=int, default=10, help='Rows to preview')
def generate(count, head):
    """Generate mock products and show the rule labels."""
    from reorderly.etl.create_synthetic import generate as gen
    from reorderly.etl.feature_builder import products_to_frame
    from reorderly.models.evaluate import summarize

    try:
        products = gen(count)
    except ValueError as e:
        click.secho(f"❌ Error: {e}", fg='red')
        sys.exit(1)

    click.echo(f"📦 Generated {len(products)} products")
    _print_stats(summarize(products))
    if head and products:
        click.echo(products_to_frame(products).head(head).to_string(index=False))


@cli.command()
@click.option('--count', '-n', type=int, default=None, help='Number of products (default from configs/model.yaml)')
@click.option('--epochs', type=int, default=None, help='Override training epochs')
@click.option('--output', '-o', type=click.Path(dir_okay=False), default=None, help='Write CSV with predictions')
def train(count, epochs, output):
    """Train the model on mock products and score every product."""
    from reorderly.models.session import ReorderSession

    cfg = {'epochs': epochs} if epochs is not None else None
    try:
        session = ReorderSession(count=count, model_cfg=cfg)
    except ValueError as e:
        click.secho(f"❌ Error: {e}", fg='red')
        sys.exit(1)

    click.echo(f"🤖 Training on {len(session.products)} products...")
    result = session.train_and_predict()
    try:
        if not result.success:
            click.secho(f"❌ {result.error}", fg='red')
            sys.exit(1)

        click.secho(f"✅ Training complete in {result.duration_seconds:.2f}s", fg='green')
        _print_stats(session.stats())

        if output:
            path = session.export(output)
            click.echo(f"💾 Predictions saved to {path}")
    finally:
        session.close()


@cli.command()
@click.option('--count', '-n', type=int, default=None, help='Number of products')
@click.option('--output', '-o', type=click.Path(dir_okay=False), default=None, help='Output CSV path')
def export(count, output):
    """Export unscored mock products to CSV."""
    from reorderly.etl.create_synthetic import generate as gen
    from reorderly.etl.export import export_csv
    from reorderly.utils.config import export_path
    from reorderly.utils.exceptions import ReorderlyException

    try:
        path = export_csv(gen(count), output or export_path())
    except (ValueError, ReorderlyException) as e:
        click.secho(f"❌ Error: {e}", fg='red')
        sys.exit(1)
    click.echo(f"💾 Products saved to {path}")


if __name__ == '__main__':
    cli()
