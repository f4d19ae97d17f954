import torch
import torch.nn as nn

N_FEATURES = 3


class ReorderNet(nn.Module):
    """MLP [3 -> 24 -> 12 -> 1] with a sigmoid output (reorder probability)."""

    def __init__(self, n_features: int = N_FEATURES, hidden_units=(24, 12)):
        super().__init__()
        layers = []
        width = n_features
        for units in hidden_units:
            layers += [nn.Linear(width, units), nn.ReLU()]
            width = units
        layers += [nn.Linear(width, 1), nn.Sigmoid()]
        self.net = nn.Sequential(*layers)

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        return self.net(x)
