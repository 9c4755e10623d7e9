"""Network configuration: presets, JSON/YAML files and the network builder."""

from __future__ import annotations

import json
from copy import deepcopy
from pathlib import Path
from typing import Dict, Mapping

import numpy as np

from .core.errors import InvalidConfigurationError
from .layers import LAYER_TYPES
from .training.net import Net

_PRESETS: Dict[str, Mapping[str, object]] = {
    "xor": {
        "input_dim": 2,
        "loss": "mse",
        "seed": 0,
        "layers": [
            {"type": "fully_connected", "units": 3, "activation": "tanh", "std_dev": 0.5},
            {"type": "fully_connected", "units": 1, "activation": "logistic", "std_dev": 0.5},
        ],
    },
    "regression-mlp": {
        "input_dim": 4,
        "loss": "mse",
        "seed": 7,
        "layers": [
            {"type": "fully_connected", "units": 8, "activation": "tanh_scaled", "std_dev": 0.3},
            {"type": "fully_connected", "units": 8, "activation": "rectifier", "std_dev": 0.3},
            {"type": "fully_connected", "units": 2, "activation": "linear", "std_dev": 0.3},
        ],
    },
    "softmax-classifier": {
        "input_dim": 5,
        "loss": "ce",
        "seed": 3,
        "layers": [
            {"type": "fully_connected", "units": 6, "activation": "logistic", "std_dev": 0.5},
            {
                "type": "fully_connected",
                "units": 3,
                "activation": "linear",
                "std_dev": 0.5,
                "bias": False,
            },
        ],
    },
}

_LAYER_KEYS = {"type", "units", "activation", "std_dev", "bias"}


def read_config_file(path: str | Path) -> Mapping[str, object]:
    path = Path(path)
    text = path.read_text()
    suffix = path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        try:
            import yaml  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("PyYAML is required to load configs in YAML format") from exc
        data = yaml.safe_load(text) or {}
    elif suffix == ".json":
        data = json.loads(text or "{}")
    else:
        raise ValueError(f"Unsupported config file type: {path.suffix}")

    if not isinstance(data, Mapping):
        raise TypeError(f"Config {path.name} must decode to a mapping")
    return data


def presets() -> Mapping[str, Mapping[str, object]]:
    return {name: deepcopy(cfg) for name, cfg in _PRESETS.items()}


def load_preset(name: str) -> Mapping[str, object]:
    try:
        return deepcopy(_PRESETS[name])
    except KeyError as exc:
        available = ", ".join(sorted(_PRESETS))
        raise KeyError(f"Unknown preset {name!r}. Available presets: {available}") from exc


def build_net(config: Mapping[str, object], *, seed: int | None = None) -> Net:
    """Build and initialize a :class:`Net` from a mapping config."""

    missing = {"input_dim", "layers"} - set(config)
    if missing:
        raise KeyError(f"Config is missing required keys: {', '.join(sorted(missing))}")
    layers = config["layers"]
    if not isinstance(layers, (list, tuple)) or not layers:
        raise InvalidConfigurationError("Config 'layers' must be a non-empty list")

    effective_seed = seed if seed is not None else config.get("seed")
    rng = np.random.default_rng(effective_seed)
    net = Net(int(config["input_dim"]), loss=str(config.get("loss", "mse")), rng=rng)

    for idx, layer_cfg in enumerate(layers):
        if not isinstance(layer_cfg, Mapping):
            raise InvalidConfigurationError(f"Layer {idx} config must be a mapping")
        unknown = set(layer_cfg) - _LAYER_KEYS
        if unknown:
            raise InvalidConfigurationError(
                f"Layer {idx} has unknown keys: {', '.join(sorted(unknown))}"
            )
        layer_type = layer_cfg.get("type", "fully_connected")
        if layer_type not in LAYER_TYPES:
            raise InvalidConfigurationError(f"Layer {idx} has unknown type {layer_type!r}")
        if "units" not in layer_cfg:
            raise InvalidConfigurationError(f"Layer {idx} is missing 'units'")
        layer = LAYER_TYPES[layer_type](
            net.output_info,
            layer_cfg["units"],
            bias=bool(layer_cfg.get("bias", True)),
            activation=layer_cfg.get("activation", "logistic"),
            std_dev=float(layer_cfg.get("std_dev", 0.05)),
            rng=rng,
        )
        net.add_layer(layer)
    return net


def load_config(path: str | Path) -> Net:
    return build_net(read_config_file(path))


__all__ = ["build_net", "load_config", "load_preset", "presets", "read_config_file"]
