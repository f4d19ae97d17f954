import yaml
from pathlib import Path

def load_config(p: str):
    with open(p, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}

ROOT = Path(__file__).resolve().parents[2]
PATHS = load_config(str(ROOT / 'configs' / 'paths.yaml'))
MODEL_CFG = load_config(str(ROOT / 'configs' / 'model.yaml'))


def reorder_net_config() -> dict:
    """Hyperparameters of the reorder classifier with defaults filled in."""
    params = MODEL_CFG.get('model', {}).get('reorder_net', {}) or {}
    return {
        'hidden_units': list(params.get('hidden_units', [24, 12])),
        'learning_rate': float(params.get('learning_rate', 0.01)),
        'epochs': int(params.get('epochs', 80)),
        'batch_size': int(params.get('batch_size', 16)),
        'train_fraction': float(params.get('train_fraction', 0.8)),
        'decision_threshold': float(params.get('decision_threshold', 0.5)),
        'random_state': params.get('random_state', 42),
    }


def generator_config() -> dict:
    params = MODEL_CFG.get('generator', {}) or {}
    return {
        'count': int(params.get('count', 150)),
        'safety_factor': float(params.get('safety_factor', 1.25)),
    }


def export_path() -> Path:
    data = PATHS.get('data', {}) or {}
    return Path(data.get('exports_dir', 'data/exports')) / data.get('export_file', 'products_with_predictions.csv')
